"""
Square hollow steel profiles (GOST 30245-2003, abridged).

The catalog is listed by ascending size. Selection code must not rely on
that order for anything but tie-breaking; it sorts by mass itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SteelProfile:
    """
    A catalog cross-section.

    Attributes:
        name: Designation "h x b x t", e.g. "100x100x4"
        height: Outer height h (mm)
        width: Outer width b (mm)
        thickness: Wall thickness t (mm)
        area: Cross-section area (cm²)
        ix: Second moment of area about x (cm⁴)
        iy: Second moment of area about y (cm⁴)
        mass_per_meter: Linear mass (kg/m)
    """
    name: str
    height: float
    width: float
    thickness: float
    area: float
    ix: float
    iy: float
    mass_per_meter: float

    @property
    def principal_inertia(self) -> float:
        """Weak-axis second moment of area (cm⁴), which governs buckling."""
        return min(self.ix, self.iy)


STEEL_PROFILES: Tuple[SteelProfile, ...] = (
    # h x b x t
    SteelProfile("40x40x3", 40, 40, 3, area=4.09, ix=8.56, iy=8.56, mass_per_meter=3.21),
    SteelProfile("40x40x4", 40, 40, 4, area=5.13, ix=10.1, iy=10.1, mass_per_meter=4.03),

    SteelProfile("60x60x3", 60, 60, 3, area=6.49, ix=32.2, iy=32.2, mass_per_meter=5.10),
    SteelProfile("60x60x4", 60, 60, 4, area=8.33, ix=39.5, iy=39.5, mass_per_meter=6.54),
    SteelProfile("60x60x5", 60, 60, 5, area=10.1, ix=45.7, iy=45.7, mass_per_meter=7.93),

    SteelProfile("80x80x4", 80, 80, 4, area=11.5, ix=101, iy=101, mass_per_meter=9.06),
    SteelProfile("80x80x5", 80, 80, 5, area=14.1, ix=121, iy=121, mass_per_meter=11.1),
    SteelProfile("80x80x6", 80, 80, 6, area=16.6, ix=139, iy=139, mass_per_meter=13.0),

    SteelProfile("100x100x4", 100, 100, 4, area=14.8, ix=213, iy=213, mass_per_meter=11.6),
    SteelProfile("100x100x5", 100, 100, 5, area=18.1, ix=257, iy=257, mass_per_meter=14.2),
    SteelProfile("100x100x6", 100, 100, 6, area=21.4, ix=298, iy=298, mass_per_meter=16.8),

    SteelProfile("120x120x5", 120, 120, 5, area=22.1, ix=469, iy=469, mass_per_meter=17.4),
    SteelProfile("120x120x6", 120, 120, 6, area=26.2, ix=546, iy=546, mass_per_meter=20.6),

    SteelProfile("140x140x6", 140, 140, 6, area=31.0, ix=921, iy=921, mass_per_meter=24.3),
    SteelProfile("140x140x8", 140, 140, 8, area=40.0, ix=1160, iy=1160, mass_per_meter=31.4),
)


def find_profile(name: str) -> SteelProfile:
    """Look up a catalog profile by designation."""
    for profile in STEEL_PROFILES:
        if profile.name == name:
            return profile
    raise ValueError(f"Unknown profile: {name!r}")

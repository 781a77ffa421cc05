"""
Material property definitions for member sizing.

This module provides the structural steel used for the truss members and the
catalog of square hollow profiles the sizing step chooses from. Stresses are
expressed in kN/cm² to match the units of the profile tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from truss_sizer.materials.profiles import STEEL_PROFILES, SteelProfile, find_profile


@dataclass
class Material:
    """
    Base class for material properties.

    Attributes:
        E: Elastic modulus (kN/cm²)
        yield_strength: Design yield strength Ry (kN/cm²)
        condition_factor: Service condition factor γc applied to Ry
        density: Material density (kg/m³)
        name: Human-readable material name

    Example:
        >>> steel = Material(
        ...     E=2.06e4,
        ...     yield_strength=24.0,
        ...     condition_factor=0.9,
        ...     density=7850.0,
        ...     name="C245"
        ... )
        >>> steel.design_resistance
        21.6
    """

    E: float  # Elastic modulus (kN/cm²)
    yield_strength: float  # Ry (kN/cm²)
    condition_factor: float  # γc
    density: float  # kg/m³
    name: Optional[str] = None

    @property
    def design_resistance(self) -> float:
        """Ry·γc (kN/cm²), the stress a member may be sized to."""
        return round(self.yield_strength * self.condition_factor, 6)

    def __repr__(self) -> str:
        if self.name:
            return f"{self.name}"
        return f"Material(E={self.E:.3g}, Ry={self.yield_strength:.3g}, γc={self.condition_factor})"


# ============================================================================
# Pre-defined Materials
# ============================================================================

class Steel(Material):
    """
    Structural steel C245 for cold-formed hollow sections.

    Properties:
        - E: 2.06·10⁴ kN/cm² (206 GPa)
        - Ry: 24 kN/cm² (240 MPa)
        - γc: 0.9
        - density: 7,850 kg/m³
    """

    def __init__(self):
        super().__init__(
            E=2.06e4,
            yield_strength=24.0,
            condition_factor=0.9,
            density=7850.0,
            name="Steel C245",
        )


class Custom(Material):
    """
    Create a custom material with specified properties.

    Args:
        E: Elastic modulus (kN/cm²)
        yield_strength: Design yield strength Ry (kN/cm²)
        condition_factor: Service condition factor γc
        density: Material density (kg/m³)
        name: Optional name for the material
    """

    def __init__(
        self,
        E: float,
        yield_strength: float,
        condition_factor: float = 0.9,
        density: float = 7850.0,
        name: Optional[str] = "Custom Material",
    ):
        super().__init__(
            E=E,
            yield_strength=yield_strength,
            condition_factor=condition_factor,
            density=density,
            name=name,
        )


STEEL_C245 = Steel()

__all__ = [
    "Material",
    "Steel",
    "Custom",
    "STEEL_C245",
    "SteelProfile",
    "STEEL_PROFILES",
    "find_profile",
]

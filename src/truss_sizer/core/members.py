"""
Section demand for axially loaded truss members.

Turns a member's axial force and length into the cross-section properties a
profile must provide: an area for strength, and for members in compression
a second moment of area from a simplified Euler buckling check.

Units follow the steel tables: forces in kN, lengths in mm at the interface
(converted to cm internally), areas in cm², inertias in cm⁴ and stresses in
kN/cm².
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from truss_sizer.materials import STEEL_C245
from truss_sizer.utils.units import mm_to_cm

# Effective length factors for in-plane buckling
WEB_EFFECTIVE_LENGTH = 0.9
CHORD_EFFECTIVE_LENGTH = 1.0


def euler_buckling_load(E: float, I: float, K: float, L: float) -> float:
    """
    Compute the Euler critical buckling load.

    F_cr = π²EI / (KL)²

    Args:
        E: Elastic modulus (kN/cm²)
        I: Second moment of area (cm⁴)
        K: Effective length factor
        L: Member length (cm)

    Returns:
        Critical buckling load (kN)
    """
    return (math.pi ** 2 * E * I) / (K * L) ** 2


def required_area(
    force: float,
    design_resistance: float = STEEL_C245.design_resistance,
) -> float:
    """Cross-section area (cm²) needed to carry |force| kN at the design resistance."""
    return abs(force) / design_resistance


def required_inertia(
    force: float,
    length: float,
    effective_length_factor: float = WEB_EFFECTIVE_LENGTH,
    elastic_modulus: float = STEEL_C245.E,
) -> float:
    """
    Second moment of area (cm⁴) that keeps a compressed member below its
    Euler load.

    I_req = |F|·(μ·L)² / (π²·E), i.e. the inertia at which
    `euler_buckling_load` equals |F|. Tension members need no inertia.

    Args:
        force: Axial force (kN), negative = compression
        length: Member length (mm)
        effective_length_factor: μ
        elastic_modulus: E (kN/cm²)
    """
    if force >= 0:
        return 0.0
    effective_length = effective_length_factor * mm_to_cm(length)
    return abs(force) * effective_length ** 2 / (math.pi ** 2 * elastic_modulus)


@dataclass(frozen=True)
class MemberDemand:
    """
    Section properties a member needs.

    Attributes:
        force: Axial force (kN)
        length: Member length (mm)
        area: Required area (cm²)
        inertia: Required second moment of area (cm⁴), 0 for tension
    """
    force: float
    length: float
    area: float
    inertia: float

    @property
    def is_compression(self) -> bool:
        return self.force < 0

    @classmethod
    def from_force(
        cls,
        force: float,
        length: float,
        effective_length_factor: float = WEB_EFFECTIVE_LENGTH,
        design_resistance: float = STEEL_C245.design_resistance,
        elastic_modulus: float = STEEL_C245.E,
    ) -> "MemberDemand":
        return cls(
            force=force,
            length=length,
            area=required_area(force, design_resistance),
            inertia=required_inertia(force, length, effective_length_factor, elastic_modulus),
        )

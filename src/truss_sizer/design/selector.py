"""
Profile selection for axially loaded members.

Picks the lightest catalog profile whose area and weak-axis inertia both
cover a member's demand. When nothing in the catalog is big enough the
heaviest profile is returned instead of failing, and the selection is
flagged so callers can send the member for manual review.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from truss_sizer.core.base import Member
from truss_sizer.core.members import WEB_EFFECTIVE_LENGTH, MemberDemand
from truss_sizer.materials import STEEL_C245
from truss_sizer.materials.profiles import STEEL_PROFILES, SteelProfile


@dataclass(frozen=True)
class ProfileSelection:
    """
    A profile chosen for a member.

    Attributes:
        profile: Selected catalog profile
        required_area: Area the member needs (cm²)
        required_inertia: Inertia the member needs (cm⁴)
        oversized_fallback: True when no profile met the demand and the
            heaviest catalog entry was substituted; verify manually.
    """
    profile: SteelProfile
    required_area: float
    required_inertia: float
    oversized_fallback: bool = False

    @property
    def area_utilization(self) -> float:
        """Required over provided area."""
        return self.required_area / self.profile.area

    @property
    def inertia_utilization(self) -> float:
        """Required over provided weak-axis inertia."""
        return self.required_inertia / self.profile.principal_inertia

    @property
    def utilization(self) -> float:
        return max(self.area_utilization, self.inertia_utilization)


@dataclass(frozen=True)
class SizedMember:
    """A solved member together with its profile selection."""
    member: Member
    selection: ProfileSelection

    @property
    def profile(self) -> SteelProfile:
        return self.selection.profile

    @property
    def mass(self) -> float:
        """Member mass (kg)."""
        return self.profile.mass_per_meter * self.member.length / 1000


def select_for_demand(
    demand: MemberDemand,
    catalog: Sequence[SteelProfile] = STEEL_PROFILES,
) -> ProfileSelection:
    """Select the lightest profile in `catalog` covering a `MemberDemand`."""
    if not catalog:
        raise ValueError("Profile catalog is empty")

    suitable = [
        p for p in catalog
        if p.area >= demand.area and p.principal_inertia >= demand.inertia
    ]
    if not suitable:
        heaviest = max(catalog, key=lambda p: p.mass_per_meter)
        return ProfileSelection(heaviest, demand.area, demand.inertia, oversized_fallback=True)

    # min() keeps the first of equally light profiles, i.e. catalog order
    lightest = min(suitable, key=lambda p: p.mass_per_meter)
    return ProfileSelection(lightest, demand.area, demand.inertia)


def select_profile(
    force: float,
    length: float,
    effective_length_factor: float = WEB_EFFECTIVE_LENGTH,
    design_resistance: float = STEEL_C245.design_resistance,
    elastic_modulus: float = STEEL_C245.E,
    catalog: Sequence[SteelProfile] = STEEL_PROFILES,
) -> ProfileSelection:
    """
    Choose the lightest adequate profile for an axial force.

    Args:
        force: Axial force (kN), negative = compression
        length: Member length (mm)
        effective_length_factor: Buckling length factor μ
        design_resistance: Ry·γc (kN/cm²)
        elastic_modulus: E (kN/cm²)
        catalog: Profiles to choose from

    Returns:
        ProfileSelection; `oversized_fallback` is set when nothing fits

    Example:
        >>> select_profile(0.0, 1000).profile.name
        '40x40x3'
    """
    demand = MemberDemand.from_force(
        force,
        length,
        effective_length_factor=effective_length_factor,
        design_resistance=design_resistance,
        elastic_modulus=elastic_modulus,
    )
    return select_for_demand(demand, catalog)

"""
Bill of materials for a sized truss.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from truss_sizer.design.selector import SizedMember
from truss_sizer.utils.units import mm_to_meters


@dataclass(frozen=True)
class BillOfMaterialsItem:
    """
    One line of the bill of materials.

    Attributes:
        category: Member category, e.g. "Upper chord"
        profile_name: Catalog designation
        length: Length of a single piece (mm), taken from the first member
        count: Number of members in the group
        total_length: Summed length of the group (m), rounded to 2 decimals
        mass_per_meter: Linear mass of the profile (kg/m)
    """
    category: str
    profile_name: str
    length: float
    count: int
    total_length: float
    mass_per_meter: float

    @property
    def mass(self) -> float:
        """Group mass (kg)."""
        return round(self.total_length * self.mass_per_meter, 2)


def build_bill_of_materials(sized_members: Iterable[SizedMember]) -> List[BillOfMaterialsItem]:
    """
    Group sized members by category and profile.

    Groups are listed in the order their first member appears. Lengths are
    summed unrounded and converted to meters once per group.
    """
    groups: Dict[Tuple[str, str], List[SizedMember]] = {}
    for sized in sized_members:
        key = (sized.member.category, sized.profile.name)
        groups.setdefault(key, []).append(sized)

    items = []
    for (category, profile_name), members in groups.items():
        total_mm = sum(s.member.length for s in members)
        items.append(BillOfMaterialsItem(
            category=category,
            profile_name=profile_name,
            length=members[0].member.length,
            count=len(members),
            total_length=round(mm_to_meters(total_mm), 2),
            mass_per_meter=members[0].profile.mass_per_meter,
        ))
    return items

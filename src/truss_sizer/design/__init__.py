"""
Member sizing and material take-off.

Modules:
- selector.py — lightest adequate profile per member, oversized fallback
- bom.py — bill of materials grouped by category and profile
"""

from truss_sizer.design.bom import BillOfMaterialsItem, build_bill_of_materials
from truss_sizer.design.selector import (
    ProfileSelection,
    SizedMember,
    select_for_demand,
    select_profile,
)

__all__ = [
    "ProfileSelection",
    "SizedMember",
    "select_profile",
    "select_for_demand",
    "BillOfMaterialsItem",
    "build_bill_of_materials",
]

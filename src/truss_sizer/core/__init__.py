"""
Core structural components.

Provides the truss arena (nodes, members, immutable trusses) and the section
demand formulas used when sizing members.
"""

from truss_sizer.core.base import Member, Node, Truss, TrussBuilder
from truss_sizer.core.members import (
    CHORD_EFFECTIVE_LENGTH,
    WEB_EFFECTIVE_LENGTH,
    MemberDemand,
    euler_buckling_load,
    required_area,
    required_inertia,
)

__all__ = [
    # Data model
    "Node",
    "Member",
    "Truss",
    "TrussBuilder",
    # Section demand
    "MemberDemand",
    "euler_buckling_load",
    "required_area",
    "required_inertia",
    "WEB_EFFECTIVE_LENGTH",
    "CHORD_EFFECTIVE_LENGTH",
]

"""
Structural analysis of solved trusses.

Modules:
- solver.py — joint-elimination equilibrium solver and joint residuals
- reporter.py — member-by-member text report with review flags
"""

from truss_sizer.analysis.solver import (
    JointLoads,
    TrussSolution,
    distribute_load,
    joint_residuals,
    max_residual,
    solve,
    solve_2x2,
    support_reactions,
)
from truss_sizer.analysis.reporter import MemberReport, member_state, report_calculation

__all__ = [
    "JointLoads",
    "TrussSolution",
    "solve",
    "solve_2x2",
    "distribute_load",
    "support_reactions",
    "joint_residuals",
    "max_residual",
    "MemberReport",
    "member_state",
    "report_calculation",
]

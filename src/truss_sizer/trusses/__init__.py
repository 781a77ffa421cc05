"""
Truss geometry generators.

Each truss type lives in its own subpackage and produces an unsolved
`truss_sizer.core.Truss` from a handful of dimensions.

Currently implemented:
- **w_truss/** — Symmetric W-pattern gable truss with posts and diagonals
"""

from truss_sizer.trusses.w_truss import WTrussParameters, build_truss, panel_count

__all__ = [
    "WTrussParameters",
    "build_truss",
    "panel_count",
]

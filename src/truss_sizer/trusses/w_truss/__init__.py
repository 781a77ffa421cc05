"""
W-pattern gable truss.

Modules:
- truss.py — panel layout and node/member generation
"""

from truss_sizer.trusses.w_truss.truss import (
    CHORD_CATEGORIES,
    DEFAULT_PANEL_SIZE,
    LOWER_CHORD,
    MIN_PANELS,
    UPPER_CHORD,
    WEB_CATEGORIES,
    WEB_DIAGONAL,
    WEB_POST,
    WTrussParameters,
    build_truss,
    panel_count,
    upper_chord_nodes,
)

__all__ = [
    "WTrussParameters",
    "build_truss",
    "panel_count",
    "upper_chord_nodes",
    "UPPER_CHORD",
    "LOWER_CHORD",
    "WEB_POST",
    "WEB_DIAGONAL",
    "CHORD_CATEGORIES",
    "WEB_CATEGORIES",
    "DEFAULT_PANEL_SIZE",
    "MIN_PANELS",
]

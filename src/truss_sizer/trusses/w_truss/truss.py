"""
Parametric W-pattern gable truss.

The span is split into an even number of equal panels so the truss is mirror
symmetric about mid-span. Geometry with four panels:
```
                   U2
            U1 ___/|\\___ U3
         ___/ |\\   |   /| \\___
    L0 /______|__\\_|_/__|_____\\ L4
              L1   L2   L3
```
Lower chord nodes sit at every panel point on y = 0. Upper chord nodes sit
above the interior panel points, rising linearly from the supports to
`rise` at mid-span. Each upper node has a post straight down and, on the
left half, a diagonal down to the next lower node towards mid-span; the
right half is the mirror image.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from truss_sizer.core.base import Truss, TrussBuilder

# Member categories
UPPER_CHORD = "Upper chord"
LOWER_CHORD = "Lower chord"
WEB_POST = "Web post"
WEB_DIAGONAL = "Web diagonal"

CHORD_CATEGORIES = (UPPER_CHORD, LOWER_CHORD)
WEB_CATEGORIES = (WEB_POST, WEB_DIAGONAL)

DEFAULT_PANEL_SIZE = 1200.0  # mm
MIN_PANELS = 4


def panel_count(span: float, target_panel_size: float = DEFAULT_PANEL_SIZE) -> int:
    """
    Number of panels for a span.

    The count is the nearest integer to span / target, never fewer than
    four, and bumped to the next even number so the truss has a centerline.

    Example:
        >>> panel_count(6000)
        6
        >>> panel_count(2000)
        4
    """
    if span <= 0:
        raise ValueError(f"span must be positive, got {span}")
    if target_panel_size <= 0:
        raise ValueError(f"target_panel_size must be positive, got {target_panel_size}")

    count = max(MIN_PANELS, int(round(span / target_panel_size)))
    if count % 2:
        count += 1
    return count


@dataclass
class WTrussParameters:
    """
    Parameters defining a W-pattern truss.

    Attributes:
        span: Distance between supports (mm)
        rise: Height of the ridge above the lower chord (mm)
        target_panel_size: Preferred panel width (mm)
    """

    span: float = 6000.0
    rise: float = 900.0
    target_panel_size: float = DEFAULT_PANEL_SIZE

    @property
    def panels(self) -> int:
        return panel_count(self.span, self.target_panel_size)

    @property
    def panel_width(self) -> float:
        return self.span / self.panels

    def to_dict(self) -> Dict[str, float]:
        """Convert parameters to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WTrussParameters":
        """Create parameters from dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


def _upper_height(i: int, panels: int, rise: float) -> float:
    half = panels // 2
    return rise * min(i, panels - i) / half


def build_truss(
    span: float,
    rise: float,
    target_panel_size: float = DEFAULT_PANEL_SIZE,
) -> Truss:
    """
    Generate the node/member graph of a W-pattern gable truss.

    Node handles: lower chord nodes L0..Ln are 0..n, upper chord nodes
    U1..U(n-1) follow as n+1..2n-1. Members are created upper chord first,
    then lower chord, posts and diagonals, each numbered left to right.

    Args:
        span: Distance between supports (mm)
        rise: Ridge height above the lower chord (mm)
        target_panel_size: Preferred panel width (mm)

    Returns:
        Unsolved `Truss` with supports at L0 and Ln

    Example:
        >>> truss = build_truss(6000, 900)
        >>> len(truss.nodes), len(truss.members)
        (12, 21)
    """
    if rise <= 0:
        raise ValueError(f"rise must be positive, got {rise}")

    panels = panel_count(span, target_panel_size)
    width = span / panels
    builder = TrussBuilder()

    lower: List[int] = [builder.add_node(i * width, 0.0) for i in range(panels + 1)]
    # Supports double as the ends of the upper chord
    upper: Dict[int, int] = {0: lower[0], panels: lower[panels]}
    for i in range(1, panels):
        upper[i] = builder.add_node(i * width, _upper_height(i, panels, rise))

    for i in range(panels):
        builder.add_member(upper[i], upper[i + 1], UPPER_CHORD)

    for i in range(panels):
        builder.add_member(lower[i], lower[i + 1], LOWER_CHORD)

    for i in range(1, panels):
        builder.add_member(upper[i], lower[i], WEB_POST)

    half = panels // 2
    for i in range(1, panels):
        if i < half:
            builder.add_member(upper[i], lower[i + 1], WEB_DIAGONAL)
        elif i > half:
            builder.add_member(upper[i], lower[i - 1], WEB_DIAGONAL)

    builder.mark_support(lower[0])
    builder.mark_support(lower[panels])
    return builder.build()


def upper_chord_nodes(truss: Truss) -> List[int]:
    """Handles of the interior upper chord nodes, left to right."""
    handles = {
        end
        for member in truss.members_in(UPPER_CHORD)
        for end in (member.start, member.end)
    }
    handles.difference_update(truss.supports)
    return sorted(handles, key=lambda h: truss.nodes[h].x)

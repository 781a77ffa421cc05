"""
Calculation result container with summary and plotting helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

from truss_sizer.calculation.config import CanopyConfig
from truss_sizer.core.base import Truss
from truss_sizer.design.bom import BillOfMaterialsItem
from truss_sizer.design.selector import SizedMember
from truss_sizer.trusses.w_truss.truss import LOWER_CHORD


@dataclass(frozen=True)
class Column:
    """
    A support column under one end of the truss.

    Attributes:
        x: Column centerline (mm, truss coordinates)
        height: Column height (mm)
        width: Column section width (mm)
    """
    x: float
    height: float
    width: float


@dataclass(frozen=True)
class CalculationResult:
    """
    Everything one calculation run produces.

    This is the whole surface consumed by drawing and export code; nothing
    in it refers back to the pipeline that built it.

    Attributes:
        config: Input configuration
        truss: Solved truss (member forces in kN)
        members: Sized members, aligned with `truss.members`
        bill_of_materials: Aggregated material list
        snow_load: Design snow load (kg/m²)
        wind_load: Design wind load (kg/m²)
        line_load: Load per meter of truss (kN/m)
        joint_loads: Downward joint loads (kN) by node handle
        reactions: Upward support reactions (kN) by node handle
        columns: Column layout
        unresolved_members: Indices of members the solver could not reach
        inconsistent_nodes: Joints the solved forces leave out of balance

    Example:
        >>> result = run_calculation(config)
        >>> result.print_summary()
        >>> if result.needs_review:
        ...     print(result.oversized_members)
    """

    config: CanopyConfig
    truss: Truss
    members: Tuple[SizedMember, ...]
    bill_of_materials: Tuple[BillOfMaterialsItem, ...]
    snow_load: float
    wind_load: float
    line_load: float
    joint_loads: Dict[int, float]
    reactions: Dict[int, float]
    columns: Tuple[Column, ...] = ()
    unresolved_members: FrozenSet[int] = field(default_factory=frozenset)
    inconsistent_nodes: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def is_complete(self) -> bool:
        """True when every member force was found and every joint balances."""
        return not self.unresolved_members and not self.inconsistent_nodes

    @property
    def oversized_members(self) -> Tuple[SizedMember, ...]:
        """Members sized with the fallback profile."""
        return tuple(m for m in self.members if m.selection.oversized_fallback)

    @property
    def needs_review(self) -> bool:
        """True if any part of the result must be checked by hand."""
        return not self.is_complete or bool(self.oversized_members)

    @property
    def total_mass(self) -> float:
        """Mass of one truss (kg)."""
        return round(sum(m.mass for m in self.members), 2)

    @property
    def max_compression(self) -> float:
        """Largest compressive force (kN, negative), 0 if none."""
        return min((m.member.force for m in self.members), default=0.0)

    @property
    def max_tension(self) -> float:
        """Largest tensile force (kN), 0 if none."""
        return max((m.member.force for m in self.members), default=0.0)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view of the result for rendering and export code."""
        return {
            "config": self.config.to_dict(),
            "loads": {
                "snow_load": self.snow_load,
                "wind_load": self.wind_load,
                "line_load": self.line_load,
            },
            "nodes": [{"x": n.x, "y": n.y} for n in self.truss.nodes],
            "members": [
                {
                    "name": s.member.name,
                    "category": s.member.category,
                    "start": s.member.start,
                    "end": s.member.end,
                    "length": s.member.length,
                    "force": s.member.force,
                    "profile": s.profile.name,
                    "oversized_fallback": s.selection.oversized_fallback,
                }
                for s in self.members
            ],
            "bill_of_materials": [
                {
                    "category": item.category,
                    "profile": item.profile_name,
                    "length": item.length,
                    "count": item.count,
                    "total_length": item.total_length,
                }
                for item in self.bill_of_materials
            ],
            "columns": [{"x": c.x, "height": c.height, "width": c.width} for c in self.columns],
            "inconsistent_nodes": sorted(self.inconsistent_nodes),
            "is_complete": self.is_complete,
            "needs_review": self.needs_review,
        }

    def summary(self) -> str:
        """Generate a human-readable summary of the calculation."""
        cfg = self.config
        lines = [
            "=" * 60,
            "  CANOPY TRUSS CALCULATION",
            "=" * 60,
            "",
            f"  Span x Rise:        {cfg.span:>7.0f} x {cfg.rise:.0f} mm",
            f"  Truss Spacing:      {cfg.truss_spacing:>7.0f} mm",
            f"  Snow Region:        {cfg.region:>7}",
            f"  Snow Load:          {self.snow_load:>10.2f} kg/m²",
            f"  Wind Load:          {self.wind_load:>10.2f} kg/m²",
            f"  Line Load:          {self.line_load:>10.3f} kN/m",
            "",
            f"  Panels:             {len(self.truss.members_in(LOWER_CHORD)):>7d}",
            f"  Max Compression:    {self.max_compression:>10.2f} kN",
            f"  Max Tension:        {self.max_tension:>10.2f} kN",
            f"  Truss Mass:         {self.total_mass:>10.2f} kg",
            "",
            "  Bill of Materials:",
        ]

        for item in self.bill_of_materials:
            lines.append(
                f"    {item.category:<14} {item.profile_name:<11} "
                f"{item.count:>3} pcs {item.total_length:>7.2f} m"
            )

        if not self.is_complete:
            lines.append("")
        if self.unresolved_members:
            lines.append(f"  WARNING: {len(self.unresolved_members)} member forces "
                         f"unresolved, reported as 0 kN")
        if self.inconsistent_nodes:
            lines.append(f"  WARNING: joints {sorted(self.inconsistent_nodes)} out of "
                         f"balance, loads are not symmetric")
        for sized in self.oversized_members:
            lines.append(f"  WARNING: {sized.member.name} uses oversized fallback "
                         f"{sized.profile.name}, verify manually")

        lines.append("")
        lines.append("=" * 60)

        return "\n".join(lines)

    def print_summary(self) -> None:
        """Print calculation summary to console."""
        print(self.summary())

    def visualize(self, show: bool = True, save_path: Optional[str] = None) -> Any:
        """
        Plot the truss with members colored by force.

        Tension is drawn blue, compression red and zero-force members grey.

        Args:
            show: Whether to display the plot
            save_path: Optional path to save the figure

        Returns:
            matplotlib Figure object
        """
        try:
            import matplotlib.pyplot as plt
        except ImportError:
            raise ImportError(
                "Visualization requires matplotlib. "
                "Install with: pip install matplotlib"
            )

        fig, ax = plt.subplots(1, 1, figsize=(12, 5))
        nodes = self.truss.nodes

        for sized in self.members:
            member = sized.member
            start, end = nodes[member.start], nodes[member.end]
            if member.is_tension:
                color = 'tab:blue'
            elif member.is_compression:
                color = 'tab:red'
            else:
                color = 'grey'
            linestyle = '--' if sized.selection.oversized_fallback else '-'
            ax.plot([start.x, end.x], [start.y, end.y], color=color,
                    linestyle=linestyle, linewidth=2)
            ax.annotate(
                f"{member.force:.1f}",
                xy=((start.x + end.x) / 2, (start.y + end.y) / 2),
                ha='center',
                fontsize=8,
            )

        for node in nodes:
            ax.plot(node.x, node.y, 'ko', markersize=4)

        ax.set_title(
            f"W truss {self.config.span:.0f} x {self.config.rise:.0f} mm, "
            f"region {self.config.region}, mass {self.total_mass:.1f} kg",
            fontsize=12
        )
        ax.set_xlabel("x (mm)")
        ax.set_ylabel("y (mm)")
        ax.set_aspect('equal')
        ax.grid(True, alpha=0.3)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')

        if show:
            plt.show()

        return fig

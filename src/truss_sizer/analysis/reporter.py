"""
Member-by-member reporting for a calculated truss.

This module provides tools for listing member forces, selected profiles
and utilization, and for flagging the parts of a result that need a
manual check.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Union

from truss_sizer.analysis.solver import TrussSolution, max_residual
from truss_sizer.design.selector import SizedMember

if TYPE_CHECKING:
    from truss_sizer.calculation.result import CalculationResult


def member_state(force: float) -> str:
    """Classify an axial force as 'tension', 'compression' or 'zero'."""
    if force > 0:
        return 'tension'
    if force < 0:
        return 'compression'
    return 'zero'


class MemberReport:
    """
    Tabular report of every member in a calculation.

    Args:
        result: CalculationResult to report on

    Example:
        >>> from truss_sizer import run_calculation, MemberReport
        >>>
        >>> result = run_calculation(config)
        >>> MemberReport(result).print_report()
    """

    def __init__(self, result: CalculationResult):
        self.result = result

    @property
    def residual(self) -> float:
        """Largest unbalanced joint force (kN)."""
        solution = TrussSolution(
            truss=self.result.truss,
            joint_loads=self.result.joint_loads,
            reactions=self.result.reactions,
            unresolved_members=self.result.unresolved_members,
            inconsistent_nodes=self.result.inconsistent_nodes,
        )
        return max_residual(solution)

    def flags(self, index: int, sized: SizedMember) -> List[str]:
        """Review flags for one member."""
        flags = []
        if index in self.result.unresolved_members:
            flags.append('UNRESOLVED')
        member = sized.member
        if {member.start, member.end} & self.result.inconsistent_nodes:
            flags.append('UNBALANCED')
        if sized.selection.oversized_fallback:
            flags.append('OVERSIZED')
        return flags

    def rows(self) -> List[Dict[str, object]]:
        """One dict per member, in truss member order."""
        rows = []
        for index, sized in enumerate(self.result.members):
            member = sized.member
            rows.append({
                'name': member.name,
                'category': member.category,
                'length': member.length,
                'force': member.force,
                'state': member_state(member.force),
                'profile': sized.profile.name,
                'required_area': sized.selection.required_area,
                'utilization': sized.selection.utilization,
                'flags': self.flags(index, sized),
            })
        return rows

    def format_report(self) -> str:
        """
        Generate a formatted member report.

        Returns:
            Formatted report string
        """
        cfg = self.result.config
        lines = [
            "",
            "=" * 96,
            "  TRUSS MEMBER REPORT",
            "=" * 96,
            "",
            f"  Span {cfg.span:.0f} mm, rise {cfg.rise:.0f} mm, region {cfg.region}, "
            f"line load {self.result.line_load:.3f} kN/m",
            "",
            f"  {'Member':<18} {'Length':>8} {'Force':>10} {'State':<12} "
            f"{'Profile':<11} {'A req':>8} {'Util':>6}  Flags",
            "  " + "-" * 92,
        ]

        for row in self.rows():
            lines.append(
                f"  {row['name']:<18} {row['length']:>8.1f} {row['force']:>10.3f} "
                f"{row['state']:<12} {row['profile']:<11} {row['required_area']:>8.3f} "
                f"{row['utilization']:>6.2f}  {' '.join(row['flags'])}"
            )

        lines.extend([
            "",
            "  SUMMARY",
            "  " + "-" * 40,
            f"  Max Compression:   {self.result.max_compression:.3f} kN",
            f"  Max Tension:       {self.result.max_tension:.3f} kN",
            f"  Joint Residual:    {self.residual:.2e} kN",
            f"  Truss Mass:        {self.result.total_mass:.2f} kg",
            f"  Needs Review:      {'yes' if self.result.needs_review else 'no'}",
            "",
            "=" * 96,
            "",
        ])

        return "\n".join(lines)

    def print_report(self) -> None:
        """Print the member report to console."""
        print(self.format_report())

    def save_report(self, path: Union[str, Path]) -> None:
        """
        Save the member report to a file.

        Args:
            path: Output file path
        """
        path = Path(path)
        with open(path, 'w') as f:
            f.write(self.format_report())


def report_calculation(result: CalculationResult, print_report: bool = True) -> MemberReport:
    """
    Convenience function to build a report and optionally print it.

    Example:
        >>> from truss_sizer.analysis import report_calculation
        >>> report = report_calculation(result)
    """
    report = MemberReport(result)

    if print_report:
        report.print_report()

    return report

"""
End-to-end canopy truss calculation.

This module provides the TrussCalculator class which runs the load model,
geometry generator, equilibrium solver and section selector in sequence and
collects their output into a `CalculationResult`.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from truss_sizer.analysis.solver import TrussSolution, distribute_load, solve
from truss_sizer.calculation.config import DEFAULT_SETTINGS, CanopyConfig, DesignSettings
from truss_sizer.calculation.result import CalculationResult, Column
from truss_sizer.core.base import Member, Truss
from truss_sizer.core.members import MemberDemand
from truss_sizer.design.bom import build_bill_of_materials
from truss_sizer.design.selector import SizedMember, select_for_demand
from truss_sizer.loads.model import design_line_load, snow_load, wind_load
from truss_sizer.materials.profiles import STEEL_PROFILES, SteelProfile
from truss_sizer.trusses.w_truss.truss import CHORD_CATEGORIES, build_truss


def layout_columns(config: CanopyConfig) -> Tuple[Column, Column]:
    """Place the two columns symmetrically about mid-span."""
    offset = (config.span - config.column_spacing) / 2
    return (
        Column(x=offset, height=config.column_height, width=config.column_width),
        Column(x=config.span - offset, height=config.column_height, width=config.column_width),
    )


class TrussCalculator:
    """
    Runs the complete canopy calculation.

    Each call to `calculate` is independent: the calculator holds only
    read-only settings, so one instance can serve many configurations.

    Args:
        settings: Engineering constants (defaults to `DEFAULT_SETTINGS`)
        catalog: Profiles available for sizing
        verbose: Print progress for each stage

    Example:
        >>> from truss_sizer import TrussCalculator, CanopyConfig
        >>>
        >>> config = CanopyConfig(span=6000, rise=900, column_spacing=5500,
        ...                       truss_spacing=3000, region="III")
        >>> result = TrussCalculator().calculate(config)
        >>> print(result.summary())
    """

    def __init__(
        self,
        settings: Optional[DesignSettings] = None,
        catalog: Tuple[SteelProfile, ...] = STEEL_PROFILES,
        verbose: bool = False,
    ):
        self.settings = settings or DEFAULT_SETTINGS
        self.catalog = tuple(catalog)
        self.verbose = verbose
        if not self.catalog:
            raise ValueError("Profile catalog is empty")

    def _compute_loads(self, config: CanopyConfig) -> Tuple[float, float, float]:
        """Return (snow kg/m², wind kg/m², line load kN/m)."""
        s = self.settings
        snow = snow_load(config.region, config.effective_roof_angle, s.reliability_factor)
        wind = wind_load(s.wind_load)
        line = design_line_load(snow, wind, config.truss_spacing, s.gravity)
        return snow, wind, line

    def _solve(self, truss: Truss, line_load: float) -> TrussSolution:
        joint_loads = distribute_load(truss, line_load)
        return solve(
            truss,
            joint_loads,
            tolerance=self.settings.singular_tolerance,
            verbose=self.verbose,
        )

    def _effective_length(self, member: Member) -> float:
        if member.category in CHORD_CATEGORIES:
            return self.settings.chord_effective_length
        return self.settings.web_effective_length

    def _size_members(self, truss: Truss) -> List[SizedMember]:
        s = self.settings
        sized = []
        for member in truss.members:
            demand = MemberDemand.from_force(
                member.force,
                member.length,
                effective_length_factor=self._effective_length(member),
                design_resistance=s.design_resistance,
                elastic_modulus=s.elastic_modulus,
            )
            sized.append(SizedMember(member, select_for_demand(demand, self.catalog)))
        return sized

    def calculate(self, config: CanopyConfig) -> CalculationResult:
        """
        Size the truss described by `config`.

        Raises:
            InvalidRegion: If the snow region is unknown. Raised before any
                geometry is generated.
        """
        snow, wind, line = self._compute_loads(config)
        if self.verbose:
            print(f"Loads: snow {snow:.2f} kg/m², wind {wind:.2f} kg/m², "
                  f"line {line:.3f} kN/m")

        truss = build_truss(config.span, config.rise, config.target_panel_size)
        if self.verbose:
            print(f"Geometry: {len(truss.nodes)} nodes, {len(truss.members)} members")

        solution = self._solve(truss, line)
        if self.verbose:
            status = "complete" if solution.is_complete else "INCOMPLETE"
            print(f"Solver: {status} after {solution.passes} passes")

        sized = self._size_members(solution.truss)
        bom = build_bill_of_materials(sized)
        if self.verbose:
            oversized = sum(1 for m in sized if m.selection.oversized_fallback)
            print(f"Sizing: {len(bom)} material groups, {oversized} oversized members")

        return CalculationResult(
            config=config,
            truss=solution.truss,
            members=tuple(sized),
            bill_of_materials=tuple(bom),
            snow_load=snow,
            wind_load=wind,
            line_load=line,
            joint_loads=solution.joint_loads,
            reactions=solution.reactions,
            columns=layout_columns(config),
            unresolved_members=solution.unresolved_members,
            inconsistent_nodes=solution.inconsistent_nodes,
        )


def run_calculation(
    config: CanopyConfig,
    settings: Optional[DesignSettings] = None,
    verbose: bool = False,
) -> CalculationResult:
    """
    Convenience function to run one calculation.

    Example:
        >>> from truss_sizer import run_calculation, CanopyConfig
        >>> result = run_calculation(CanopyConfig(
        ...     span=6000, rise=900, column_spacing=5500,
        ...     truss_spacing=3000, region="III", roof_angle=15,
        ... ))
        >>> result.snow_load
        252.0
    """
    return TrussCalculator(settings=settings, verbose=verbose).calculate(config)

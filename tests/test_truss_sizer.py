"""
Test suite for Truss Sizer.

Run with: pytest tests/ -v
"""

import json
import math
from dataclasses import replace

import numpy as np
import pytest

from truss_sizer import (
    CanopyConfig,
    DesignSettings,
    InvalidRegion,
    MemberReport,
    SteelProfile,
    TrussBuilder,
    TrussCalculator,
    build_truss,
    distribute_load,
    joint_residuals,
    materials,
    run_batch,
    run_calculation,
    select_profile,
    solve,
)
from truss_sizer.analysis import max_residual, member_state, solve_2x2, support_reactions
from truss_sizer.calculation import layout_columns
from truss_sizer.core import euler_buckling_load, required_area, required_inertia
from truss_sizer.design import build_bill_of_materials
from truss_sizer.design.selector import select_for_demand
from truss_sizer.core.members import MemberDemand
from truss_sizer.loads import (
    SNOW_LOAD_MAP,
    SNOW_REGIONS,
    design_line_load,
    ground_snow_load,
    snow_load,
    snow_reduction_factor,
    wind_load,
)
from truss_sizer.materials import STEEL_PROFILES, find_profile
from truss_sizer.trusses.w_truss import (
    LOWER_CHORD,
    UPPER_CHORD,
    WEB_DIAGONAL,
    WEB_POST,
    WTrussParameters,
    panel_count,
    upper_chord_nodes,
)
from truss_sizer.utils import kgf_to_kilonewtons, mm_to_cm, mm_to_meters


def make_config(**overrides):
    params = dict(
        span=6000,
        rise=900,
        column_spacing=5500,
        truss_spacing=3000,
        region="III",
        roof_angle=15,
    )
    params.update(overrides)
    return CanopyConfig(**params)


def make_tied_apex_truss():
    """Two diagonals over a split tie; the tie midpoint is listed first."""
    builder = TrussBuilder()
    mid = builder.add_node(1000, 0)
    left = builder.add_node(0, 0)
    right = builder.add_node(2000, 0)
    apex = builder.add_node(1000, 1000)
    builder.add_member(left, mid, LOWER_CHORD)
    builder.add_member(mid, right, LOWER_CHORD)
    builder.add_member(left, apex, WEB_DIAGONAL)
    builder.add_member(apex, right, WEB_DIAGONAL)
    builder.mark_support(left)
    builder.mark_support(right)
    return builder.build()


def make_braced_square():
    """Square with both diagonals: every joint has three unknowns."""
    builder = TrussBuilder()
    a = builder.add_node(0, 0)
    b = builder.add_node(1000, 0)
    c = builder.add_node(1000, 1000)
    d = builder.add_node(0, 1000)
    for start, end in ((a, b), (b, c), (c, d), (d, a)):
        builder.add_member(start, end, LOWER_CHORD)
    builder.add_member(a, c, WEB_DIAGONAL)
    builder.add_member(b, d, WEB_DIAGONAL)
    builder.mark_support(a)
    builder.mark_support(b)
    return builder.build()


class TestUnits:
    """Test unit conversions."""

    def test_length_conversions(self):
        assert mm_to_meters(3000) == 3.0
        assert mm_to_cm(1200) == 120.0

    def test_kgf_to_kilonewtons(self):
        assert kgf_to_kilonewtons(1000) == pytest.approx(9.81)
        assert kgf_to_kilonewtons(1000, gravity=10.0) == pytest.approx(10.0)


class TestLoads:
    """Test snow and wind loads."""

    def test_region_table(self):
        assert SNOW_REGIONS == ("I", "II", "III", "IV", "V", "VI", "VII", "VIII")
        assert ground_snow_load("I") == 80.0
        assert ground_snow_load("VIII") == 560.0

    def test_flat_roof_gets_full_snow(self):
        assert snow_load("III", 15) == 252.0
        assert snow_load("III", 25) == 252.0

    def test_reduction_factor_is_linear_between_25_and_60(self):
        assert snow_reduction_factor(42.5) == pytest.approx(0.5)
        assert snow_load("III", 42.5) == 126.0

    def test_steep_roof_sheds_snow(self):
        for region in SNOW_REGIONS:
            assert snow_load(region, 61) == 0.0
            assert snow_load(region, 60) == 0.0

    def test_snow_never_increases_with_angle(self):
        angles = np.linspace(0, 90, 181)
        for region in SNOW_REGIONS:
            loads = [snow_load(region, a) for a in angles]
            assert all(b <= a for a, b in zip(loads, loads[1:]))
            assert loads[0] == round(SNOW_LOAD_MAP[region] * 1.4, 2)

    def test_invalid_region(self):
        with pytest.raises(InvalidRegion) as exc:
            snow_load("IX", 15)
        assert exc.value.region == "IX"
        assert isinstance(exc.value, ValueError)

    def test_non_string_region(self):
        with pytest.raises(InvalidRegion):
            ground_snow_load(None)

    def test_wind_is_fixed(self):
        assert wind_load() == 30.0
        assert wind_load(45) == 45.0

    def test_line_load(self):
        line = design_line_load(252.0, 30.0, 3000)
        assert line == pytest.approx(282.0 * 3.0 * 9.81 / 1000)


class TestGeometry:
    """Test W truss generation."""

    @pytest.mark.parametrize("span,expected", [
        (2000, 4),
        (4800, 4),
        (6000, 6),
        (7000, 6),
        (10000, 8),
    ])
    def test_panel_count(self, span, expected):
        assert panel_count(span) == expected

    def test_panel_count_rejects_non_positive(self):
        with pytest.raises(ValueError):
            panel_count(0)
        with pytest.raises(ValueError):
            panel_count(6000, target_panel_size=-1)

    def test_node_and_member_counts(self):
        for span in (2000, 6000, 10000):
            n = panel_count(span)
            truss = build_truss(span, 900)
            assert len(truss.nodes) == 2 * n
            assert len(truss.members) == 4 * n - 3

    def test_member_order_and_categories(self):
        truss = build_truss(6000, 900)
        categories = [m.category for m in truss.members]
        assert categories == (
            [UPPER_CHORD] * 6 + [LOWER_CHORD] * 6 + [WEB_POST] * 5 + [WEB_DIAGONAL] * 4
        )
        assert truss.members[0].name == "Upper chord 1"

    def test_upper_chord_profile(self):
        truss = build_truss(6000, 900)
        heights = [truss.nodes[h].y for h in upper_chord_nodes(truss)]
        assert heights == pytest.approx([300, 600, 900, 600, 300])

    def test_supports_and_span(self):
        truss = build_truss(6000, 900)
        assert truss.supports == (0, 6)
        assert truss.span == pytest.approx(6000)

    def test_diagonals_point_to_mid_span(self):
        truss = build_truss(6000, 900)
        for member in truss.members_in(WEB_DIAGONAL):
            upper = truss.nodes[member.start]
            lower = truss.nodes[member.end]
            assert abs(lower.x - 3000) < abs(upper.x - 3000)

    def test_rejects_non_positive_rise(self):
        with pytest.raises(ValueError):
            build_truss(6000, 0)

    def test_parameters_round_trip(self):
        params = WTrussParameters(span=7200, rise=1000)
        assert params.panels == 6
        assert params.panel_width == pytest.approx(1200)
        assert WTrussParameters.from_dict({**params.to_dict(), "extra": 1}) == params


class TestTrussBuilder:
    """Test the node/member arena."""

    def test_rejects_unknown_node(self):
        builder = TrussBuilder()
        builder.add_node(0, 0)
        with pytest.raises(ValueError):
            builder.add_member(0, 5, LOWER_CHORD)

    def test_requires_two_supports(self):
        builder = TrussBuilder()
        a = builder.add_node(0, 0)
        builder.add_node(1000, 0)
        builder.mark_support(a)
        with pytest.raises(ValueError):
            builder.build()

    def test_supports_sorted_left_to_right(self):
        truss = make_tied_apex_truss()
        assert truss.supports == (1, 2)


class TestSolver:
    """Test joint-elimination equilibrium."""

    def test_solve_2x2(self):
        assert solve_2x2(1, 1, 3, 1, -1, 1) == pytest.approx((2, 1))
        assert solve_2x2(1, 0, 1, -1, 0, 1) is None

    def test_reactions_are_half_the_load(self):
        truss = build_truss(6000, 900)
        loads = distribute_load(truss, 8.0)
        reactions = support_reactions(truss, loads)
        assert reactions == pytest.approx({0: 24.0, 6: 24.0})

    def test_load_shared_by_interior_upper_nodes(self):
        truss = build_truss(6000, 900)
        loads = distribute_load(truss, 10.0)
        assert sorted(loads) == upper_chord_nodes(truss)
        assert sum(loads.values()) == pytest.approx(60.0)
        assert len(set(loads.values())) == 1

    def test_w_truss_solves_completely(self):
        truss = build_truss(6000, 900)
        solution = solve(truss, distribute_load(truss, 8.3))
        assert solution.is_complete
        assert solution.truss.is_solved
        assert max_residual(solution) < 1e-6

    @pytest.fixture
    def solved(self):
        """Standard 6000 x 900 truss under a uniform load."""
        truss = build_truss(6000, 900)
        return solve(truss, distribute_load(truss, 8.3)).truss

    def test_chord_signs(self, solved):
        assert all(m.force < 0 for m in solved.members_in(UPPER_CHORD))
        assert all(m.force > 0 for m in solved.members_in(LOWER_CHORD))
        assert all(m.force != 0 for m in solved.members_in(WEB_DIAGONAL))

    def test_end_posts_carry_no_force(self, solved):
        posts = solved.members_in(WEB_POST)
        assert posts[0].force == 0.0
        assert posts[-1].force == 0.0

    def test_interior_posts_carry_force(self, solved):
        posts = solved.members_in(WEB_POST)
        assert all(post.force > 0 for post in posts[1:-1])

    def test_symmetric_forces(self, solved):
        for category in (UPPER_CHORD, LOWER_CHORD, WEB_POST, WEB_DIAGONAL):
            forces = [m.force for m in solved.members_in(category)]
            assert forces == pytest.approx(forces[::-1], abs=1e-6)

    def test_residuals_shape(self):
        truss = build_truss(6000, 900)
        residuals = joint_residuals(solve(truss, distribute_load(truss, 8.3)))
        assert residuals.shape == (12, 2)
        assert np.allclose(residuals, 0.0, atol=1e-6)

    def test_collinear_joint_is_deferred(self):
        truss = make_tied_apex_truss()
        load = 10.0
        solution = solve(truss, {3: load})

        assert solution.is_complete
        assert 0 in solution.deferred_nodes
        tie_left, tie_right, diag_left, diag_right = solution.forces
        assert tie_left == pytest.approx(load / 2)
        assert tie_right == pytest.approx(load / 2)
        assert diag_left == pytest.approx(-load / math.sqrt(2))
        assert diag_right == pytest.approx(-load / math.sqrt(2))

    def test_stalled_solve_reports_unresolved(self):
        truss = make_braced_square()
        solution = solve(truss, {2: 10.0})

        assert not solution.is_complete
        assert solution.unresolved_members == frozenset(range(6))
        assert solution.forces == (0.0,) * 6
        assert solution.passes == 1
        assert solution.inconsistent_nodes == frozenset()

    def test_asymmetric_load_is_flagged(self):
        solution = solve(build_truss(6000, 900), {7: 10.0})

        assert not solution.unresolved_members
        assert solution.inconsistent_nodes
        assert not solution.is_complete
        assert max_residual(solution) > 1.0

    def test_symmetric_load_balances(self):
        truss = build_truss(6000, 900)
        solution = solve(truss, distribute_load(truss, 8.3))
        assert solution.inconsistent_nodes == frozenset()

    def test_zero_force_members_under_heavy_load(self):
        truss = build_truss(30000, 200)
        solution = solve(truss, distribute_load(truss, 50000.0))
        posts = solution.truss.members_in(WEB_POST)

        assert solution.is_complete
        assert posts[0].force == 0.0
        assert posts[-1].force == 0.0

    def test_load_on_unknown_node(self):
        truss = build_truss(6000, 900)
        with pytest.raises(ValueError):
            solve(truss, {99: 1.0})

    def test_distribute_load_needs_upper_chord(self):
        with pytest.raises(ValueError):
            distribute_load(make_tied_apex_truss(), 5.0)

    def test_verbose_prints_progress(self, capsys):
        truss = build_truss(4800, 600)
        solve(truss, distribute_load(truss, 5.0), verbose=True)
        assert "Pass 1: node 0" in capsys.readouterr().out


class TestSectionDemand:
    """Test area and inertia requirements."""

    def test_required_area(self):
        assert required_area(21.6) == pytest.approx(1.0)
        assert required_area(-43.2) == pytest.approx(2.0)

    def test_tension_needs_no_inertia(self):
        assert required_inertia(50.0, 3000) == 0.0
        assert required_inertia(0.0, 3000) == 0.0

    def test_inertia_matches_euler_load(self):
        force = -50.0
        inertia = required_inertia(force, 3000, effective_length_factor=1.0)
        assert euler_buckling_load(2.06e4, inertia, 1.0, 300.0) == pytest.approx(50.0)

    def test_material_design_resistance(self):
        assert materials.STEEL_C245.design_resistance == pytest.approx(21.6)
        custom = materials.Custom(E=2.1e4, yield_strength=30.0, condition_factor=1.0)
        settings = DesignSettings.for_material(custom)
        assert settings.design_resistance == pytest.approx(30.0)
        assert settings.elastic_modulus == 2.1e4


class TestProfileSelection:
    """Test section selection."""

    def test_zero_force_gets_lightest(self):
        selection = select_profile(0.0, 1000)
        assert selection.profile.name == "40x40x3"
        assert not selection.oversized_fallback

    def test_tension_governed_by_area(self):
        assert select_profile(100.0, 3000).profile.name == "40x40x4"

    def test_compression_governed_by_buckling(self):
        selection = select_profile(-50.0, 3000, effective_length_factor=1.0)
        assert selection.profile.name == "60x60x3"
        assert selection.profile.principal_inertia >= selection.required_inertia

    def test_oversized_fallback(self):
        selection = select_profile(-5000.0, 6000)
        assert selection.profile.name == "140x140x8"
        assert selection.oversized_fallback
        assert selection.utilization > 1

    def test_ties_keep_catalog_order(self):
        first = SteelProfile("A", 50, 50, 3, area=5, ix=20, iy=20, mass_per_meter=4.0)
        second = SteelProfile("B", 50, 50, 3, area=6, ix=25, iy=25, mass_per_meter=4.0)
        demand = MemberDemand.from_force(10.0, 1000)
        assert select_for_demand(demand, (first, second)).profile.name == "A"

    def test_empty_catalog(self):
        with pytest.raises(ValueError):
            select_profile(1.0, 1000, catalog=())

    def test_find_profile(self):
        assert find_profile("100x100x4").area == 14.8
        with pytest.raises(ValueError):
            find_profile("1x1x1")

    def test_catalog_inertia_is_symmetric(self):
        assert all(p.ix == p.iy for p in STEEL_PROFILES)


class TestConfig:
    """Test calculation configuration."""

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            make_config(span=0)
        with pytest.raises(ValueError):
            make_config(truss_spacing=-100)

    def test_columns_must_fit_under_span(self):
        with pytest.raises(ValueError):
            make_config(column_spacing=6500)

    def test_default_roof_angle_follows_slope(self):
        config = make_config(roof_angle=None)
        assert config.effective_roof_angle == pytest.approx(math.degrees(math.atan(0.3)))

    def test_legacy_keys(self):
        config = CanopyConfig.from_dict({
            "width": 6000,
            "height": 900,
            "columnSpacing": 5500,
            "trussSpacing": 3000,
            "region": "III",
            "unused": True,
        })
        assert config == make_config(roof_angle=None)

    def test_from_file(self, tmp_path):
        path = tmp_path / "canopy.json"
        path.write_text(json.dumps(make_config().to_dict()))
        assert CanopyConfig.from_file(path) == make_config()


class TestCalculation:
    """Test the full pipeline."""

    def test_loads(self):
        result = run_calculation(make_config())
        assert result.snow_load == 252.0
        assert result.wind_load == 30.0
        assert result.line_load == pytest.approx(282.0 * 3.0 * 9.81 / 1000)

    def test_pipeline(self):
        result = run_calculation(make_config())

        assert result.is_complete
        assert not result.needs_review
        assert len(result.truss.members_in(LOWER_CHORD)) == 6
        assert len(result.members) == len(result.truss.members)
        for sized in result.members:
            assert sized.profile.area >= sized.selection.required_area
            assert sized.profile.principal_inertia >= sized.selection.required_inertia

    def test_reactions_balance_load(self):
        result = run_calculation(make_config())
        total = sum(result.joint_loads.values())
        assert sum(result.reactions.values()) == pytest.approx(total)
        assert total == pytest.approx(result.line_load * 6.0)

    def test_small_span_uses_four_panels(self):
        result = run_calculation(make_config(span=2000, rise=400, column_spacing=1800))
        assert len(result.truss.members_in(LOWER_CHORD)) == 4
        assert result.is_complete

    def test_invalid_region_raised_first(self):
        with pytest.raises(InvalidRegion):
            run_calculation(make_config(region="IX"))

    def test_deterministic(self):
        first = run_calculation(make_config())
        second = run_calculation(make_config())
        assert first.truss.forces == second.truss.forces
        assert first.to_dict() == second.to_dict()

    def test_bill_of_materials(self):
        result = run_calculation(make_config())
        bom = result.bill_of_materials

        assert sum(item.count for item in bom) == len(result.members)
        assert len({(i.category, i.profile_name) for i in bom}) == len(bom)
        assert bom[0].category == UPPER_CHORD
        upper = [i for i in bom if i.category == UPPER_CHORD]
        expected = sum(m.length for m in result.truss.members_in(UPPER_CHORD)) / 1000
        assert sum(i.total_length for i in upper) == pytest.approx(expected, abs=0.02)

    def test_bill_of_materials_from_sized_members(self):
        result = run_calculation(make_config())
        assert tuple(build_bill_of_materials(result.members)) == result.bill_of_materials

    def test_columns(self):
        config = make_config()
        left, right = layout_columns(config)
        assert left.x == 250
        assert right.x == 5750
        assert run_calculation(config).columns == (left, right)

    def test_heavier_region_is_not_lighter(self):
        light = run_calculation(make_config(region="I"))
        heavy = run_calculation(make_config(region="VIII"))
        assert heavy.total_mass >= light.total_mass
        assert heavy.max_compression < light.max_compression

    def test_oversized_members_flagged(self):
        tiny = SteelProfile("10x10x1", 10, 10, 1, area=0.01, ix=0.01, iy=0.01,
                            mass_per_meter=0.1)
        result = TrussCalculator(catalog=(tiny,)).calculate(make_config())
        assert result.needs_review
        assert result.oversized_members
        assert "WARNING" in result.summary()

    def test_unbalanced_joints_need_review(self):
        result = replace(run_calculation(make_config()), inconsistent_nodes=frozenset({7}))
        assert not result.is_complete
        assert result.needs_review
        assert "out of balance" in result.summary()
        assert result.to_dict()["inconsistent_nodes"] == [7]

    def test_summary(self):
        summary = run_calculation(make_config()).summary()
        assert "CANOPY TRUSS CALCULATION" in summary
        assert "252.00" in summary

    def test_to_dict_is_json_serializable(self):
        data = run_calculation(make_config()).to_dict()
        assert json.loads(json.dumps(data))["config"]["region"] == "III"
        assert len(data["members"]) == 21

    def test_verbose(self, capsys):
        TrussCalculator(verbose=True).calculate(make_config())
        out = capsys.readouterr().out
        assert "Loads: snow 252.00" in out
        assert "Solver: complete" in out


class TestReport:
    """Test member reporting."""

    def test_member_state(self):
        assert member_state(1.0) == 'tension'
        assert member_state(-1.0) == 'compression'
        assert member_state(0.0) == 'zero'

    def test_report_lists_every_member(self):
        result = run_calculation(make_config())
        report = MemberReport(result)
        text = report.format_report()
        for member in result.truss.members:
            assert member.name in text
        assert report.residual < 1e-6

    def test_report_flags(self):
        tiny = SteelProfile("10x10x1", 10, 10, 1, area=0.01, ix=0.01, iy=0.01,
                            mass_per_meter=0.1)
        result = TrussCalculator(catalog=(tiny,)).calculate(make_config())
        rows = MemberReport(result).rows()
        assert any('OVERSIZED' in row['flags'] for row in rows)
        assert all(row['flags'] == [] for row in rows if row['state'] == 'zero')

    def test_unbalanced_flag(self):
        result = replace(run_calculation(make_config()), inconsistent_nodes=frozenset({7}))
        flagged = [row["name"] for row in MemberReport(result).rows()
                   if "UNBALANCED" in row["flags"]]
        touching = [m.name for m in result.truss.members if 7 in (m.start, m.end)]
        assert flagged == touching

    def test_save_report(self, tmp_path):
        path = tmp_path / "report.txt"
        MemberReport(run_calculation(make_config())).save_report(path)
        assert "TRUSS MEMBER REPORT" in path.read_text()


class TestBatch:
    """Test batch calculations."""

    def test_results_in_input_order(self):
        configs = [make_config(region=r) for r in ("V", "I", "III")]
        batch = run_batch(configs)
        assert [r.config.region for r in batch.results] == ["V", "I", "III"]
        assert batch.lightest().config.region == "I"
        assert batch.heaviest().config.region == "V"

    def test_parallel_matches_sequential(self):
        configs = [make_config(region=r) for r in SNOW_REGIONS[:4]]
        sequential = run_batch(configs)
        parallel = run_batch(configs, processes=2)
        assert [r.total_mass for r in parallel.results] == [
            r.total_mass for r in sequential.results
        ]

    def test_statistics(self):
        batch = run_batch([make_config(region=r) for r in SNOW_REGIONS])
        stats = batch.statistics()['total_mass']
        assert stats['min'] <= stats['mean'] <= stats['max']
        assert "BATCH SUMMARY (8 calculations)" in batch.summary()

    def test_empty_batch(self):
        batch = run_batch([])
        assert len(batch) == 0
        with pytest.raises(ValueError):
            batch.lightest()

    def test_save(self, tmp_path):
        batch = run_batch([make_config(region=r) for r in ("I", "II")])
        batch.save(tmp_path)
        assert (tmp_path / "calculation_0001.json").exists()
        summary = json.loads((tmp_path / "summary.json").read_text())
        assert summary['n_calculations'] == 2


class TestVisualization:
    """Test plotting."""

    def test_visualize_returns_figure(self, tmp_path):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        result = run_calculation(make_config())
        path = tmp_path / "truss.png"
        fig = result.visualize(show=False, save_path=str(path))
        assert fig is not None
        assert path.exists()

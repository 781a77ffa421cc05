"""
Calculation pipeline: configuration, single runs, batch runs.

Modules:
- config.py — CanopyConfig and DesignSettings
- calculator.py — TrussCalculator orchestrating loads, geometry, solving, sizing
- result.py — CalculationResult with summary and plotting
- batch.py — many configurations, sequential or multiprocessing
"""

from truss_sizer.calculation.batch import BatchResults, run_batch
from truss_sizer.calculation.calculator import TrussCalculator, layout_columns, run_calculation
from truss_sizer.calculation.config import DEFAULT_SETTINGS, CanopyConfig, DesignSettings
from truss_sizer.calculation.result import CalculationResult, Column

__all__ = [
    "CanopyConfig",
    "DesignSettings",
    "DEFAULT_SETTINGS",
    "TrussCalculator",
    "run_calculation",
    "layout_columns",
    "CalculationResult",
    "Column",
    "BatchResults",
    "run_batch",
]

"""
Load model for canopy trusses.

Modules:
- model.py — snow region table, snow/wind loads, truss line load
"""

from truss_sizer.loads.model import (
    DEFAULT_WIND_LOAD,
    SNOW_LOAD_MAP,
    SNOW_REGIONS,
    SNOW_RELIABILITY_FACTOR,
    InvalidRegion,
    design_line_load,
    ground_snow_load,
    snow_load,
    snow_reduction_factor,
    wind_load,
)

__all__ = [
    "SNOW_LOAD_MAP",
    "SNOW_REGIONS",
    "SNOW_RELIABILITY_FACTOR",
    "DEFAULT_WIND_LOAD",
    "InvalidRegion",
    "ground_snow_load",
    "snow_reduction_factor",
    "snow_load",
    "wind_load",
    "design_line_load",
]

"""Utility functions."""

from truss_sizer.utils.units import (
    GRAVITY,
    mm_to_meters,
    meters_to_mm,
    mm_to_cm,
    cm_to_mm,
    degrees_to_radians,
    radians_to_degrees,
    kgf_to_kilonewtons,
    kilonewtons_to_kgf,
)

__all__ = [
    "GRAVITY",
    "mm_to_meters",
    "meters_to_mm",
    "mm_to_cm",
    "cm_to_mm",
    "degrees_to_radians",
    "radians_to_degrees",
    "kgf_to_kilonewtons",
    "kilonewtons_to_kgf",
]

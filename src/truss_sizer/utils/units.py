"""
Unit conversion utilities.

Drawings are dimensioned in millimeters, the steel tables use centimeters,
and normative loads are given in kilogram-force per square meter, so the
pipeline converts between all three.
"""

import math

# Standard gravity as used by the load tables (m/s²)
GRAVITY = 9.81


# Length conversions
def mm_to_meters(mm: float) -> float:
    """Convert millimeters to meters."""
    return mm / 1000


def meters_to_mm(meters: float) -> float:
    """Convert meters to millimeters."""
    return meters * 1000


def mm_to_cm(mm: float) -> float:
    """Convert millimeters to centimeters."""
    return mm / 10


def cm_to_mm(cm: float) -> float:
    """Convert centimeters to millimeters."""
    return cm * 10


# Angle conversions
def degrees_to_radians(degrees: float) -> float:
    """Convert degrees to radians."""
    return math.radians(degrees)


def radians_to_degrees(radians: float) -> float:
    """Convert radians to degrees."""
    return math.degrees(radians)


# Force conversions
def kgf_to_kilonewtons(kgf: float, gravity: float = GRAVITY) -> float:
    """
    Convert kilogram-force to kilonewtons.

    Example:
        >>> round(kgf_to_kilonewtons(1000), 2)
        9.81
    """
    return kgf * gravity / 1000


def kilonewtons_to_kgf(kn: float, gravity: float = GRAVITY) -> float:
    """Convert kilonewtons to kilogram-force."""
    return kn * 1000 / gravity

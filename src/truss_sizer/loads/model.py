"""
Snow and wind loads on a canopy roof.

Snow follows SP 20.13330: a tabulated ground snow value per region, reduced
by the roof-shape coefficient μ and multiplied by the load reliability
factor. Wind is not computed; a fixed design value is injected instead.
"""

from __future__ import annotations

from typing import Dict, Tuple

from truss_sizer.utils.units import GRAVITY, kgf_to_kilonewtons, mm_to_meters

# Normative ground snow load Sg by region (kg/m²)
SNOW_LOAD_MAP: Dict[str, float] = {
    "I": 80.0,
    "II": 120.0,
    "III": 180.0,
    "IV": 240.0,
    "V": 320.0,
    "VI": 400.0,
    "VII": 480.0,
    "VIII": 560.0,
}

SNOW_REGIONS: Tuple[str, ...] = tuple(SNOW_LOAD_MAP)

# Load reliability factor γf for snow
SNOW_RELIABILITY_FACTOR = 1.4

# Design wind load (kg/m²), used in place of a full wind calculation
DEFAULT_WIND_LOAD = 30.0

# Roof angles (degrees) bounding the linear μ transition
FULL_SNOW_ANGLE = 25.0
NO_SNOW_ANGLE = 60.0


class InvalidRegion(ValueError):
    """Raised when a snow region code is not in `SNOW_LOAD_MAP`."""

    def __init__(self, region):
        self.region = region
        super().__init__(
            f"Unknown snow region {region!r}; expected one of {', '.join(SNOW_REGIONS)}"
        )


def ground_snow_load(region: str) -> float:
    """Normative ground snow load Sg for a region (kg/m²)."""
    try:
        return SNOW_LOAD_MAP[region]
    except (KeyError, TypeError):
        raise InvalidRegion(region) from None


def snow_reduction_factor(roof_angle: float) -> float:
    """
    Roof-shape coefficient μ for a single-span gable roof.

    μ = 1 up to 25°, falls linearly to 0 at 60°, and stays 0 beyond.

    Args:
        roof_angle: Roof slope (degrees)
    """
    if roof_angle > NO_SNOW_ANGLE:
        return 0.0
    if roof_angle > FULL_SNOW_ANGLE:
        return (NO_SNOW_ANGLE - roof_angle) / (NO_SNOW_ANGLE - FULL_SNOW_ANGLE)
    return 1.0


def snow_load(
    region: str,
    roof_angle: float,
    reliability_factor: float = SNOW_RELIABILITY_FACTOR,
) -> float:
    """
    Design snow load on the horizontal projection of the roof.

    S = Sg · μ · γf, rounded to two decimals. The exposure and thermal
    coefficients are taken as 1.

    Args:
        region: Snow region code, "I" through "VIII"
        roof_angle: Roof slope (degrees)
        reliability_factor: γf

    Returns:
        Design snow load (kg/m²)

    Raises:
        InvalidRegion: If `region` is not a known code

    Example:
        >>> snow_load("III", 15)
        252.0
    """
    sg = ground_snow_load(region)
    mu = snow_reduction_factor(roof_angle)
    return round(sg * mu * reliability_factor, 2)


def wind_load(value: float = DEFAULT_WIND_LOAD) -> float:
    """Design wind load (kg/m²). A fixed input, not a computed value."""
    return float(value)


def design_line_load(
    snow: float,
    wind: float,
    truss_spacing: float,
    gravity: float = GRAVITY,
) -> float:
    """
    Convert roof surface loads into a load per meter of truss.

    Each truss collects the roof strip between its neighbours, so the
    surface load is multiplied by the truss spacing.

    Args:
        snow: Design snow load (kg/m²)
        wind: Design wind load (kg/m²)
        truss_spacing: Distance between trusses (mm)
        gravity: g (m/s²)

    Returns:
        Line load along the truss (kN/m)
    """
    kgf_per_meter = (snow + wind) * mm_to_meters(truss_spacing)
    return kgf_to_kilonewtons(kgf_per_meter, gravity)

"""
Inputs for a canopy calculation.

`CanopyConfig` holds the per-run dimensions and snow region. `DesignSettings`
collects the engineering constants the pipeline uses, so they can be varied
for a study without touching module-level defaults.
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from truss_sizer.core.members import CHORD_EFFECTIVE_LENGTH, WEB_EFFECTIVE_LENGTH
from truss_sizer.loads.model import DEFAULT_WIND_LOAD, SNOW_RELIABILITY_FACTOR
from truss_sizer.materials import STEEL_C245, Material
from truss_sizer.trusses.w_truss.truss import DEFAULT_PANEL_SIZE
from truss_sizer.utils.units import GRAVITY

# Older configuration files used the drawing labels for these fields
_LEGACY_KEYS = {
    "width": "span",
    "trussWidth": "span",
    "height": "rise",
    "trussHeight": "rise",
    "spacing": "truss_spacing",
    "trussSpacing": "truss_spacing",
    "columnSpacing": "column_spacing",
    "columnHeight": "column_height",
    "columnWidth": "column_width",
    "roofAngle": "roof_angle",
}


@dataclass(frozen=True)
class CanopyConfig:
    """
    Dimensions and site data for one canopy.

    Attributes:
        span: Truss span between supports (mm)
        rise: Ridge height above the lower chord (mm)
        column_spacing: Distance between the two support columns (mm)
        truss_spacing: Distance between adjacent trusses (mm)
        region: Snow region code, "I" through "VIII"
        roof_angle: Roof slope for the snow coefficient (degrees). Defaults
            to the slope of the truss, atan(rise / (span / 2)).
        column_height: Column height below the truss (mm)
        column_width: Column section width (mm)
        target_panel_size: Preferred truss panel width (mm)

    Example:
        >>> config = CanopyConfig(span=6000, rise=900, column_spacing=5500,
        ...                       truss_spacing=3000, region="III", roof_angle=15)
    """

    span: float
    rise: float
    column_spacing: float
    truss_spacing: float
    region: str
    roof_angle: Optional[float] = None
    column_height: float = 2000.0
    column_width: float = 80.0
    target_panel_size: float = DEFAULT_PANEL_SIZE

    def __post_init__(self):
        for name in ("span", "rise", "column_spacing", "truss_spacing",
                     "column_height", "column_width", "target_panel_size"):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.column_spacing > self.span:
            raise ValueError(
                f"column_spacing ({self.column_spacing}) cannot exceed span ({self.span})"
            )

    @property
    def effective_roof_angle(self) -> float:
        """Roof slope used for snow (degrees)."""
        if self.roof_angle is not None:
            return self.roof_angle
        return math.degrees(math.atan2(self.rise, self.span / 2))

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CanopyConfig":
        """Create a configuration from a dictionary, accepting legacy keys."""
        data = {_LEGACY_KEYS.get(k, k): v for k, v in data.items()}
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CanopyConfig":
        """Load a configuration from a JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)


@dataclass(frozen=True)
class DesignSettings:
    """
    Engineering constants for loads, solving and sizing.

    Attributes:
        design_resistance: Ry·γc of the member steel (kN/cm²)
        elastic_modulus: E of the member steel (kN/cm²)
        web_effective_length: Buckling length factor μ for posts and diagonals
        chord_effective_length: Buckling length factor μ for chords
        reliability_factor: Snow load factor γf
        wind_load: Design wind load (kg/m²)
        gravity: g (m/s²)
        singular_tolerance: Determinant below which a joint is singular
    """

    design_resistance: float = STEEL_C245.design_resistance
    elastic_modulus: float = STEEL_C245.E
    web_effective_length: float = WEB_EFFECTIVE_LENGTH
    chord_effective_length: float = CHORD_EFFECTIVE_LENGTH
    reliability_factor: float = SNOW_RELIABILITY_FACTOR
    wind_load: float = DEFAULT_WIND_LOAD
    gravity: float = GRAVITY
    singular_tolerance: float = 1e-9

    @classmethod
    def for_material(cls, material: Material, **overrides) -> "DesignSettings":
        """Settings using the stiffness and resistance of `material`."""
        return cls(
            design_resistance=material.design_resistance,
            elastic_modulus=material.E,
            **overrides,
        )


DEFAULT_SETTINGS = DesignSettings()

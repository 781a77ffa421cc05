"""
Truss Sizer - Steel canopy truss calculation.

Computes snow and wind loads for a roof canopy, generates a W-pattern gable
truss, solves member forces by joint equilibrium and picks the lightest
square hollow profile for each member.

Example:
    >>> from truss_sizer import CanopyConfig, run_calculation
    >>> config = CanopyConfig(span=6000, rise=900, column_spacing=5500,
    ...                       truss_spacing=3000, region="III", roof_angle=15)
    >>> result = run_calculation(config)
    >>> result.print_summary()

Batch studies:
    >>> from truss_sizer import run_batch
    >>> batch = run_batch(configs, processes=4)
    >>> print(batch.lightest().total_mass)
"""

__version__ = "1.0.0"
__author__ = "Gabriel Jordaan"
__email__ = "165073349+ACertainArchangel@users.noreply.github.com"

# Data model
from truss_sizer.core.base import Member, Node, Truss, TrussBuilder
from truss_sizer.core.members import MemberDemand, required_area, required_inertia

# Loads
from truss_sizer.loads.model import InvalidRegion, design_line_load, snow_load, wind_load

# Geometry
from truss_sizer.trusses.w_truss import WTrussParameters, build_truss

# Solving
from truss_sizer.analysis.solver import TrussSolution, distribute_load, joint_residuals, solve

# Sizing
from truss_sizer.design import (
    BillOfMaterialsItem,
    ProfileSelection,
    SizedMember,
    build_bill_of_materials,
    select_profile,
)

# Materials
from truss_sizer import materials
from truss_sizer.materials import STEEL_PROFILES, SteelProfile

# Pipeline
from truss_sizer.calculation import (
    BatchResults,
    CalculationResult,
    CanopyConfig,
    DesignSettings,
    TrussCalculator,
    run_batch,
    run_calculation,
)

# Reporting
from truss_sizer.analysis.reporter import MemberReport

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Data model
    "Node",
    "Member",
    "Truss",
    "TrussBuilder",
    "MemberDemand",
    "required_area",
    "required_inertia",
    # Loads
    "InvalidRegion",
    "snow_load",
    "wind_load",
    "design_line_load",
    # Geometry
    "WTrussParameters",
    "build_truss",
    # Solving
    "TrussSolution",
    "solve",
    "distribute_load",
    "joint_residuals",
    # Sizing
    "ProfileSelection",
    "SizedMember",
    "select_profile",
    "BillOfMaterialsItem",
    "build_bill_of_materials",
    # Materials
    "materials",
    "SteelProfile",
    "STEEL_PROFILES",
    # Pipeline
    "CanopyConfig",
    "DesignSettings",
    "TrussCalculator",
    "run_calculation",
    "CalculationResult",
    "BatchResults",
    "run_batch",
    # Reporting
    "MemberReport",
]

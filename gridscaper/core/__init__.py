"""Core geometry engine.

- CatenarySolver: Newton-Raphson solve for the catenary parameter
- ConductorCurveBuilder: Sampled 3-D conductor curves between poles
- ClearanceEvaluator: Minimum conductor-to-ground clearance per span
- ElevationModel: Single height(x, z) query over one elevation source
- GeoCalculator: Haversine distance, bearing and local projection
"""

from gridscaper.core.catenary_solver import CatenarySolution, CatenarySolver, solve_catenary_parameter
from gridscaper.core.clearance_evaluator import (
    ClearanceEvaluator,
    ClearanceReport,
    ConductorGroup,
    check_clearances,
)
from gridscaper.core.curve_builder import ConductorCurveBuilder, CurveOptions, get_conductor_curve
from gridscaper.core.elevation_model import (
    ElevationModel,
    ElevationProfileSource,
    FlatSource,
    GISSource,
    PoleProfileSource,
    SurfaceOptions,
    create_elevation_surface,
    select_source,
)
from gridscaper.core.errors import GridScaperError, InvalidInputData
from gridscaper.core.geo_calculator import GeoCalculator

__all__ = [
    # Catenary solver
    "CatenarySolver",
    "CatenarySolution",
    "solve_catenary_parameter",
    # Curve builder
    "ConductorCurveBuilder",
    "CurveOptions",
    "get_conductor_curve",
    # Clearance
    "ClearanceEvaluator",
    "ClearanceReport",
    "ConductorGroup",
    "check_clearances",
    # Elevation model
    "ElevationModel",
    "FlatSource",
    "PoleProfileSource",
    "ElevationProfileSource",
    "GISSource",
    "SurfaceOptions",
    "create_elevation_surface",
    "select_source",
    # Errors
    "GridScaperError",
    "InvalidInputData",
    # Geo calculator
    "GeoCalculator",
]

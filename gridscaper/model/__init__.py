"""Data model classes for power line scenes.

- CurvePoint: Sampled conductor point (x, y, z)
- Pole: Support structure; attachment height = base elevation + pole height
- GISRecord: Surveyed pole location (lat, lng, elevation)
- ProfilePoint: Ground elevation sample along a profile
- DataWarning: Advisory import problems

Span and Scene depend on the core engine and are imported directly:
    from gridscaper.model.span import Span
    from gridscaper.model.scene import Scene
"""

from gridscaper.model.curve_point import CurvePoint
from gridscaper.model.gis_record import GISRecord
from gridscaper.model.pole import Pole
from gridscaper.model.profile_point import ProfilePoint
from gridscaper.model.warning import (
    DataWarning,
    FewPointsWarning,
    FlatElevationWarning,
    LargeElevationRangeWarning,
    MissingColumnWarning,
    MissingDistanceWarning,
    SinglePointWarning,
    SkippedRowWarning,
    TightClusterWarning,
    UnparsableValueWarning,
    WideSpreadWarning,
)

__all__ = [
    "CurvePoint",
    "Pole",
    "GISRecord",
    "ProfilePoint",
    "DataWarning",
    "SkippedRowWarning",
    "MissingColumnWarning",
    "UnparsableValueWarning",
    "SinglePointWarning",
    "TightClusterWarning",
    "WideSpreadWarning",
    "FlatElevationWarning",
    "LargeElevationRangeWarning",
    "FewPointsWarning",
    "MissingDistanceWarning",
]

"""Warning - Advisory data problems found while importing survey data.

Warnings never block an import. They are returned alongside the parsed
data (and logged) so callers can show them to the user:
- Rows skipped for missing or out-of-range values
- Columns that were absent and defaulted
- Datasets that are suspiciously small, clustered, spread out or flat
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class DataWarning(ABC):
    """Abstract base class for import warnings.

    Subclasses store specific parameters and compute message as property.
    Use isinstance() to check warning type.
    Each subclass has a warning_type field for serialization.
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable warning message."""

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class SkippedRowWarning(DataWarning):
    """A CSV row was dropped.

    Attributes:
        line_number: 1-based line number in the source text
        reason: Why the row was rejected
        warning_type: Type identifier for serialization
    """

    line_number: int
    reason: str
    warning_type: str = "SkippedRowWarning"

    @property
    def message(self) -> str:
        return f"Row {self.line_number} skipped: {self.reason}"


@dataclass(frozen=True)
class MissingColumnWarning(DataWarning):
    """An optional column was absent and a default was used for every row.

    Attributes:
        column: Column role that was not found
        default: Value substituted for it
        warning_type: Type identifier for serialization
    """

    column: str
    default: float
    warning_type: str = "MissingColumnWarning"

    @property
    def message(self) -> str:
        return f"No {self.column} column found - using {self.default:g} for all rows"


@dataclass(frozen=True)
class UnparsableValueWarning(DataWarning):
    """A non-numeric cell was coerced to a default.

    Attributes:
        line_number: 1-based line number in the source text
        column: Column role of the cell
        value: Raw cell text
        default: Value substituted for it
        warning_type: Type identifier for serialization
    """

    line_number: int
    column: str
    value: str
    default: float
    warning_type: str = "UnparsableValueWarning"

    @property
    def message(self) -> str:
        return f"Row {self.line_number}: {self.column} '{self.value}' is not a number - using {self.default:g}"


@dataclass(frozen=True)
class SinglePointWarning(DataWarning):
    """Only one valid point was imported, so no line can be formed."""

    warning_type: str = "SinglePointWarning"

    @property
    def message(self) -> str:
        return "Only one valid point found - at least two are needed for a power line"


@dataclass(frozen=True)
class TightClusterWarning(DataWarning):
    """All points lie within a tiny lat/lng extent.

    Attributes:
        lat_spread_deg: Latitude extent in degrees
        lng_spread_deg: Longitude extent in degrees
        warning_type: Type identifier for serialization
    """

    lat_spread_deg: float
    lng_spread_deg: float
    warning_type: str = "TightClusterWarning"

    @property
    def message(self) -> str:
        return (
            f"Points are very close together ({self.lat_spread_deg:.6f}° x {self.lng_spread_deg:.6f}°) "
            f"- check coordinate precision"
        )


@dataclass(frozen=True)
class WideSpreadWarning(DataWarning):
    """Points span more than a degree and may not belong to one line.

    Attributes:
        lat_spread_deg: Latitude extent in degrees
        lng_spread_deg: Longitude extent in degrees
        warning_type: Type identifier for serialization
    """

    lat_spread_deg: float
    lng_spread_deg: float
    warning_type: str = "WideSpreadWarning"

    @property
    def message(self) -> str:
        return (
            f"Points span a large area ({self.lat_spread_deg:.3f}° x {self.lng_spread_deg:.3f}°) "
            f"- the scene will be heavily scaled"
        )


@dataclass(frozen=True)
class FlatElevationWarning(DataWarning):
    """Every point has the same elevation.

    Attributes:
        elevation: The shared elevation
        warning_type: Type identifier for serialization
    """

    elevation: float
    warning_type: str = "FlatElevationWarning"

    @property
    def message(self) -> str:
        return f"All points have the same elevation ({self.elevation:g}) - terrain will be flat"


@dataclass(frozen=True)
class LargeElevationRangeWarning(DataWarning):
    """Elevation span is large enough to dwarf the scene.

    Attributes:
        elevation_span: max - min elevation
        threshold: Span above which the warning is raised
        warning_type: Type identifier for serialization
    """

    elevation_span: float
    threshold: float
    warning_type: str = "LargeElevationRangeWarning"

    @property
    def message(self) -> str:
        return (
            f"Elevation range of {self.elevation_span:.0f} exceeds {self.threshold:.0f} "
            f"- consider reducing the height scale"
        )


@dataclass(frozen=True)
class FewPointsWarning(DataWarning):
    """Profile has too few points to describe the terrain well.

    Attributes:
        count: Number of valid points
        recommended: Recommended minimum
        warning_type: Type identifier for serialization
    """

    count: int
    recommended: int
    warning_type: str = "FewPointsWarning"

    @property
    def message(self) -> str:
        return f"Only {self.count} profile points - at least {self.recommended} recommended for realistic terrain"


@dataclass(frozen=True)
class MissingDistanceWarning(DataWarning):
    """Profile has no distance column; the order of kept rows is used as distance."""

    warning_type: str = "MissingDistanceWarning"

    @property
    def message(self) -> str:
        return "No distance column found - using row order as distance"

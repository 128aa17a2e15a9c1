"""Record-level checks and the validation result shared by the importers."""

from dataclasses import dataclass, field
from math import isfinite
from typing import Any, Optional

from gridscaper.model.warning import DataWarning, SkippedRowWarning


@dataclass
class ValidationResult:
    """Outcome of a dry-run import.

    Attributes:
        success: True if the data can be imported
        errors: Blocking problems (import would fail)
        warnings: Advisory problems (import would succeed)
        summary: Key statistics of the parsed data (empty on failure)
    """

    success: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[DataWarning] = field(default_factory=list)
    summary: dict[str, Any] = field(default_factory=dict)

    @property
    def warning_messages(self) -> list[str]:
        return [warning.message for warning in self.warnings]


def validate_geographic_record(
    line_number: int,
    lat: Optional[float],
    lng: Optional[float],
    elevation: float,
) -> Optional[SkippedRowWarning]:
    """Check one parsed GIS row before it becomes a record.

    Args:
        line_number: 1-based source line, for the warning
        lat: Parsed latitude (None if unparsable)
        lng: Parsed longitude (None if unparsable)
        elevation: Parsed ground elevation

    Returns:
        SkippedRowWarning describing the first problem, or None if the row is valid.
    """
    if lat is None or lng is None or not isfinite(lat) or not isfinite(lng):
        return SkippedRowWarning(line_number=line_number, reason=f"invalid coordinates lat={lat}, lng={lng}")
    if not -90 <= lat <= 90:
        return SkippedRowWarning(line_number=line_number, reason=f"latitude {lat} outside [-90, 90]")
    if not -180 <= lng <= 180:
        return SkippedRowWarning(line_number=line_number, reason=f"longitude {lng} outside [-180, 180]")
    if not isfinite(elevation):
        return SkippedRowWarning(line_number=line_number, reason=f"non-finite elevation {elevation}")
    return None

"""ProfilePoint - One sample of a ground elevation profile."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProfilePoint:
    """A surveyed ground sample along a profile line.

    Attributes:
        distance: Distance along the profile (position among kept rows when the file has none)
        elevation: Ground elevation
        index: 0-based data row ordinal in the source file
        x: Projected easting, when the export carries coordinates
        y: Projected northing, when the export carries coordinates
    """

    distance: float
    elevation: float
    index: int
    x: Optional[float] = None
    y: Optional[float] = None

    def __repr__(self) -> str:
        return f"ProfilePoint(d={self.distance:.1f}, elev={self.elevation:.1f})"

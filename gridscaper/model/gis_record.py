"""GISRecord - One surveyed pole location from a GIS export.

Records are immutable once parsed. Scene conversion produces new records
with their planar position (x, z) and distance along the line filled in.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional

from gridscaper.model.pole import Pole


@dataclass(frozen=True)
class GISRecord:
    """A geographic pole record.

    Attributes:
        id: Pole identifier (from the file, or generated as Pole_<n>)
        lat: Latitude in degrees [-90, 90]
        lng: Longitude in degrees [-180, 180]
        elevation: Ground elevation at the pole
        height: Pole height above ground
        line_number: 1-based line of the source CSV the record came from
        x: Scene x after conversion (east is positive)
        z: Scene z after conversion (north is positive)
        cumulative_distance: Scene distance along the line from the first record
    """

    id: str
    lat: float
    lng: float
    elevation: float
    height: float
    line_number: int = 0
    x: Optional[float] = None
    z: Optional[float] = None
    cumulative_distance: float = 0.0

    @property
    def is_converted(self) -> bool:
        return self.x is not None and self.z is not None

    def with_scene_position(self, x: float, z: float, cumulative_distance: float) -> "GISRecord":
        return replace(self, x=x, z=z, cumulative_distance=cumulative_distance)

    def to_pole(self) -> Pole:
        """Pole standing at the converted scene position."""
        if not self.is_converted:
            raise ValueError(f"GISRecord {self.id} has no scene position - convert it first")
        return Pole(x=self.x, z=self.z, height=self.height, elevation=self.elevation, id=self.id)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "lat": self.lat,
            "lng": self.lng,
            "elevation": self.elevation,
            "height": self.height,
        }
        if self.is_converted:
            data["x"] = self.x
            data["z"] = self.z
            data["cumulative_distance"] = self.cumulative_distance
        return data

    def __repr__(self) -> str:
        return f"GISRecord({self.id}, ({self.lat:.6f}, {self.lng:.6f}), elev={self.elevation:.1f})"

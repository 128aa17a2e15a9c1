"""Pole - Support structure carrying conductors.

A Pole stands at a plan position (x, z) on ground of a given base elevation.
Its attachment height (crossarm, where conductors are anchored) is always
derived as base elevation + pole height and never stored on its own.

The persisted shape is {x, z, height, elevation}.
"""

from dataclasses import dataclass
from math import hypot, isfinite
from typing import Any, Optional


@dataclass
class Pole:
    """A utility pole placed in the scene.

    Attributes:
        x: Horizontal scene coordinate of the pole base
        z: Scene depth coordinate of the pole base
        height: Pole height from ground to crossarm
        elevation: Ground (base) elevation at the pole position
        id: Optional identifier (e.g. from a GIS import)
    """

    x: float
    z: float
    height: float
    elevation: float = 0.0
    id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate pole geometry."""
        for name in ("x", "z", "height", "elevation"):
            value = getattr(self, name)
            if not isfinite(value):
                raise ValueError(f"Pole {name} must be finite, got {value}")
        if self.height <= 0:
            raise ValueError(f"Pole height must be positive, got {self.height}")

    @property
    def attachment_height(self) -> float:
        """Elevation of the crossarm (conductor attachment point)."""
        return self.elevation + self.height

    @property
    def xz(self) -> tuple[float, float]:
        """Return (x, z) plan position."""
        return (self.x, self.z)

    def horizontal_distance_to(self, other: "Pole") -> float:
        """Plan distance to another pole, ignoring elevation."""
        return hypot(other.x - self.x, other.z - self.z)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted pole record."""
        data: dict[str, Any] = {"x": self.x, "z": self.z, "height": self.height, "elevation": self.elevation}
        if self.id is not None:
            data["id"] = self.id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pole":
        """Create Pole from a persisted record.

        x, z and height are required - raises KeyError if missing.
        """
        return cls(
            x=float(data["x"]),
            z=float(data["z"]),
            height=float(data["height"]),
            elevation=float(data.get("elevation", 0.0)),
            id=data.get("id"),
        )

    def __repr__(self) -> str:
        return f"Pole(({self.x:.1f}, {self.z:.1f}), base={self.elevation:.1f}, {self.height:.1f} tall)"

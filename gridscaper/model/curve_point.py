"""CurvePoint - A sampled point on a conductor curve.

Curve points are produced fresh on every recompute and never mutated;
a changed pole or tension replaces the whole point sequence.

Scene axes: x and z are the horizontal plane (z is the scene depth axis),
y is elevation.
"""

from dataclasses import dataclass
from math import isnan


@dataclass(frozen=True)
class CurvePoint:
    """A point in scene space.

    Attributes:
        x: Horizontal scene coordinate
        y: Elevation
        z: Scene depth coordinate

    Example:
        point = CurvePoint(x=15.0, y=9.5, z=0.0)
    """

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if isnan(self.y):
            raise ValueError(f"CurvePoint cannot have NaN elevation at ({self.x}, {self.z})")

    @property
    def xz(self) -> tuple[float, float]:
        """Return (x, z) plan position."""
        return (self.x, self.z)

    def __repr__(self) -> str:
        return f"CurvePoint(x={self.x:.2f}, y={self.y:.2f}, z={self.z:.2f})"

"""Span - The stretch of line between two consecutive poles.

A span carries several parallel conductors, one per crossarm position.
All conductors share the span's tension factor and differ only in their
lateral offset from the pole centerline. Together they form the conductor
group that clearance is judged on.
"""

from dataclasses import dataclass, field
from math import isfinite

from gridscaper.constants import ConductorConfig
from gridscaper.core.clearance_evaluator import ConductorGroup
from gridscaper.core.curve_builder import CurveOptions, get_conductor_curve
from gridscaper.model.curve_point import CurvePoint
from gridscaper.model.pole import Pole


@dataclass
class Span:
    """A pair of poles with the conductors hung between them.

    Attributes:
        pole_a: Start pole
        pole_b: End pole
        key: Span identifier, e.g. "0-1"
        tension: Dimensionless tension factor shared by all conductors
        lateral_offsets: Crossarm positions, one conductor per entry
    """

    pole_a: Pole
    pole_b: Pole
    key: str
    tension: float = ConductorConfig.DEFAULT_TENSION
    lateral_offsets: tuple[float, ...] = field(default=ConductorConfig.CROSSARM_OFFSETS)

    def __post_init__(self) -> None:
        if not self.tension > 0:
            raise ValueError(f"Span {self.key} tension must be positive, got {self.tension}")
        if not self.lateral_offsets:
            raise ValueError(f"Span {self.key} needs at least one conductor offset")
        if not all(isfinite(offset) for offset in self.lateral_offsets):
            raise ValueError(f"Span {self.key} has non-finite conductor offsets: {self.lateral_offsets}")

    @property
    def length(self) -> float:
        """Horizontal distance between the poles."""
        return self.pole_a.horizontal_distance_to(self.pole_b)

    def conductor_curve(
        self,
        lateral_offset: float,
        samples: int = ConductorConfig.DEFAULT_SAMPLES,
        terrain_offset_z: float = 0.0,
        sag_model: str = "catenary",
    ) -> list[CurvePoint]:
        """Sample a single conductor at the given crossarm position."""
        options = CurveOptions(
            tension=self.tension,
            samples=samples,
            lateral_offset=lateral_offset,
            terrain_offset_z=terrain_offset_z,
            sag_model=sag_model,
        )
        return get_conductor_curve(pole_a=self.pole_a, pole_b=self.pole_b, options=options)

    def conductor_curves(
        self,
        samples: int = ConductorConfig.DEFAULT_SAMPLES,
        terrain_offset_z: float = 0.0,
        sag_model: str = "catenary",
    ) -> ConductorGroup:
        """Sample every conductor on the span as one clearance group."""
        curves = [
            self.conductor_curve(
                lateral_offset=offset,
                samples=samples,
                terrain_offset_z=terrain_offset_z,
                sag_model=sag_model,
            )
            for offset in self.lateral_offsets
        ]
        return ConductorGroup.from_curves(key=self.key, curves=curves)

    def __repr__(self) -> str:
        return f"Span({self.key}, {self.length:.1f} long, {len(self.lateral_offsets)} conductors)"

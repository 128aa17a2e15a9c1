"""Scene - The persisted design: poles, terrain and line settings.

A Scene is the single source of truth a session is restored from. It holds
the ordered pole list, the active terrain source and the global line
settings. Everything derived (spans, conductor curves, clearance reports)
is recomputed from scratch on request; nothing is cached.

Persisted shape (to_dict / to_json):
    {
        "poles": [{"x", "z", "height", "elevation"}, ...],
        "terrain": {"kind": "flat" | "profile" | "elevationProfile" | "gis", ...},
        "tension", "clearance_threshold", "samples", "crossarm_offsets",
        "terrain_offset_z", "sag_model"
    }

A profile terrain stores its literal (distance, elevation) knots, so a
reloaded scene rebuilds the identical surface.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from gridscaper.constants import ClearanceConfig, ConductorConfig
from gridscaper.core.clearance_evaluator import ClearanceReport, ConductorGroup, check_clearances
from gridscaper.core.elevation_model import ElevationModel, ElevationSource, FlatSource, source_from_dict
from gridscaper.model.pole import Pole
from gridscaper.model.span import Span

logger = logging.getLogger(__name__)


@dataclass
class Scene:
    """A power line design on a terrain.

    Attributes:
        poles: Ordered poles; consecutive poles form spans
        terrain: Active elevation source
        tension: Dimensionless tension factor for every span
        clearance_threshold: Minimum allowed conductor-to-ground clearance
        samples: Curve sampling intervals per conductor
        crossarm_offsets: Lateral conductor positions on each pole
        terrain_offset_z: Terrain frame offset along the depth axis
        sag_model: "catenary" or "sine"
    """

    poles: list[Pole] = field(default_factory=list)
    terrain: ElevationSource = field(default_factory=FlatSource)
    tension: float = ConductorConfig.DEFAULT_TENSION
    clearance_threshold: float = ClearanceConfig.DEFAULT_THRESHOLD
    samples: int = ConductorConfig.DEFAULT_SAMPLES
    crossarm_offsets: tuple[float, ...] = ConductorConfig.CROSSARM_OFFSETS
    terrain_offset_z: float = 0.0
    sag_model: str = "catenary"

    def __post_init__(self) -> None:
        if not self.tension > 0:
            raise ValueError(f"tension must be positive, got {self.tension}")
        if self.samples < 1:
            raise ValueError(f"samples must be at least 1, got {self.samples}")
        if self.sag_model not in ConductorConfig.SAG_MODELS:
            raise ValueError(f"Invalid sag_model '{self.sag_model}'. Must be one of: {ConductorConfig.SAG_MODELS}")
        self.crossarm_offsets = tuple(self.crossarm_offsets)

    # =========================================================================
    # Derived geometry
    # =========================================================================

    def elevation_model(self) -> ElevationModel:
        """Fresh ElevationModel over the active terrain source."""
        return ElevationModel(self.terrain)

    def spans(self) -> list[Span]:
        """Spans between consecutive poles, keyed "i-(i+1)"."""
        return [
            Span(
                pole_a=self.poles[i],
                pole_b=self.poles[i + 1],
                key=f"{i}-{i + 1}",
                tension=self.tension,
                lateral_offsets=self.crossarm_offsets,
            )
            for i in range(len(self.poles) - 1)
        ]

    def compute_curves(self) -> list[ConductorGroup]:
        """Sample every conductor of every span."""
        return [
            span.conductor_curves(
                samples=self.samples,
                terrain_offset_z=self.terrain_offset_z,
                sag_model=self.sag_model,
            )
            for span in self.spans()
        ]

    def check_clearances(self) -> list[ClearanceReport]:
        """Recompute all curves and judge them against the terrain."""
        groups = self.compute_curves()
        reports = check_clearances(
            groups=groups,
            height_fn=self.elevation_model().height,
            threshold=self.clearance_threshold,
        )
        violations = sum(1 for report in reports if report.is_violation)
        logger.info(f"Recomputed {len(groups)} spans: {violations} clearance violations")
        return reports

    # =========================================================================
    # Editing
    # =========================================================================

    def place_pole(
        self,
        x: float,
        z: float,
        height: float = ConductorConfig.DEFAULT_POLE_HEIGHT,
        pole_id: Optional[str] = None,
    ) -> Pole:
        """Append a pole whose base elevation is sampled from the active terrain."""
        if not ConductorConfig.MIN_POLE_HEIGHT <= height <= ConductorConfig.MAX_POLE_HEIGHT:
            raise ValueError(
                f"Pole height {height} outside "
                f"[{ConductorConfig.MIN_POLE_HEIGHT}, {ConductorConfig.MAX_POLE_HEIGHT}]"
            )
        elevation = self.elevation_model().height(x, z)
        pole = Pole(x=x, z=z, height=height, elevation=elevation, id=pole_id)
        self.poles.append(pole)
        logger.info(f"Placed {pole}")
        return pole

    def set_terrain(self, source: ElevationSource) -> None:
        """Replace the active terrain source. Existing pole elevations are kept."""
        logger.info(f"Terrain switched from {self.terrain.kind} to {source.kind}")
        self.terrain = source

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        return {
            "poles": [pole.to_dict() for pole in self.poles],
            "terrain": self.terrain.to_dict(),
            "tension": self.tension,
            "clearance_threshold": self.clearance_threshold,
            "samples": self.samples,
            "crossarm_offsets": list(self.crossarm_offsets),
            "terrain_offset_z": self.terrain_offset_z,
            "sag_model": self.sag_model,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scene":
        """Rehydrate a persisted scene. Missing settings take their defaults."""
        terrain_data = data.get("terrain")
        return cls(
            poles=[Pole.from_dict(pole) for pole in data.get("poles", [])],
            terrain=source_from_dict(terrain_data) if terrain_data else FlatSource(),
            tension=float(data.get("tension", ConductorConfig.DEFAULT_TENSION)),
            clearance_threshold=float(data.get("clearance_threshold", ClearanceConfig.DEFAULT_THRESHOLD)),
            samples=int(data.get("samples", ConductorConfig.DEFAULT_SAMPLES)),
            crossarm_offsets=tuple(float(o) for o in data.get("crossarm_offsets", ConductorConfig.CROSSARM_OFFSETS)),
            terrain_offset_z=float(data.get("terrain_offset_z", 0.0)),
            sag_model=data.get("sag_model", "catenary"),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str) -> "Scene":
        return cls.from_dict(json.loads(text))

    def __repr__(self) -> str:
        return f"Scene({len(self.poles)} poles, terrain={self.terrain.kind}, tension={self.tension:g})"

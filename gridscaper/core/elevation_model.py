"""Ground elevation model behind a single height(x, z) query.

Exactly one elevation source is active at a time. Sources are explicit,
immutable values (a tagged union on `kind`), never ambient state:

- FlatSource ("flat"): flat ground or a fixed synthetic undulation
- PoleProfileSource ("profile"): piecewise-linear surface through user-placed
  pole elevations along the scene depth axis
- ElevationProfileSource ("elevationProfile"): imported 1-D survey profile,
  rescaled to the scene width and extruded across its depth
- GISSource ("gis"): scattered surface through imported survey points

When several sources are configured, select_source() picks by priority
gis > elevationProfile > profile > flat.

Every surface is a total function over the plane: queries outside a source's
natural domain return the nearest boundary value (or the source's default
elevation), never raise and never return NaN.
"""

import logging
from dataclasses import dataclass, field
from math import cos, isfinite, isnan, sin
from typing import Any, Callable, ClassVar, Iterable, NamedTuple, Optional, Sequence, Union

import numpy as np
from scipy.spatial import cKDTree

from gridscaper.constants import GISConfig, ProfileConfig, TerrainConfig

logger = logging.getLogger(__name__)

HeightFunction = Callable[[float, float], float]

# Infinite coordinates are pulled back to this magnitude before evaluation
MAX_COORDINATE = 1e15


# =============================================================================
# Option structs
# =============================================================================


@dataclass(frozen=True)
class SurfaceOptions:
    """Scattered GIS surface settings.

    Attributes:
        method: "nearest_pair" (blend of the two nearest points) or "idw"
        falloff_distance: Distance beyond which points lose influence
        default_elevation: Elevation far from all points (None = mean of points)
    """

    method: str = "nearest_pair"
    falloff_distance: float = GISConfig.FALLOFF_DISTANCE
    default_elevation: Optional[float] = None

    def __post_init__(self) -> None:
        if self.method not in GISConfig.SURFACE_METHODS:
            raise ValueError(f"Invalid method '{self.method}'. Must be one of: {GISConfig.SURFACE_METHODS}")
        if not self.falloff_distance > 0:
            raise ValueError(f"falloff_distance must be positive, got {self.falloff_distance}")


@dataclass(frozen=True)
class ProfileTerrainOptions:
    """Layout of an imported elevation profile in the scene.

    Attributes:
        scene_width: Scene x extent the profile distance is rescaled to
        scene_depth: Scene z extent of the extruded terrain band
        height_scale: Vertical exaggeration applied to normalized elevations
        center_profile: Center the profile on x = 0 (else it starts at x = 0)
    """

    scene_width: float = ProfileConfig.SCENE_WIDTH
    scene_depth: float = ProfileConfig.SCENE_DEPTH
    height_scale: float = ProfileConfig.HEIGHT_SCALE
    center_profile: bool = True

    def __post_init__(self) -> None:
        if not self.scene_width > 0:
            raise ValueError(f"scene_width must be positive, got {self.scene_width}")
        if not self.scene_depth > 0:
            raise ValueError(f"scene_depth must be positive, got {self.scene_depth}")
        if not self.height_scale > 0:
            raise ValueError(f"height_scale must be positive, got {self.height_scale}")


# =============================================================================
# Surface primitives
# =============================================================================


class SurfacePoint(NamedTuple):
    """A known ground sample in scene coordinates."""

    x: float
    z: float
    elevation: float


class PiecewiseLinearProfile:
    """Piecewise-linear elevation along one axis.

    Knots are sorted by position. Queries at a knot return its elevation
    exactly; between knots the two bracketing knots are linearly
    interpolated; outside the knot range the nearest end elevation applies
    (np.interp clamps to its end values).

    Example:
        profile = PiecewiseLinearProfile([(0.0, 10.0), (50.0, 20.0)])
        profile(25.0)  # 15.0
        profile(-5.0)  # 10.0 (clamped)
    """

    def __init__(self, knots: Iterable[tuple[float, float]]) -> None:
        ordered = sorted(((float(p), float(e)) for p, e in knots), key=lambda k: k[0])
        if not ordered:
            raise ValueError("PiecewiseLinearProfile needs at least one knot")
        self._positions = np.array([p for p, _ in ordered], dtype=float)
        self._elevations = np.array([e for _, e in ordered], dtype=float)

    @property
    def positions(self) -> list[float]:
        return self._positions.tolist()

    @property
    def elevations(self) -> list[float]:
        return self._elevations.tolist()

    @property
    def knots(self) -> list[tuple[float, float]]:
        """Sorted (position, elevation) knots."""
        return list(zip(self.positions, self.elevations))

    def __call__(self, position: float) -> float:
        return float(np.interp(position, self._positions, self._elevations))


def procedural_height(x: float, z: float, style: str = "flat") -> float:
    """Deterministic synthetic ground used when no explicit data exists.

    Args:
        x: Horizontal scene coordinate
        z: Scene depth coordinate
        style: "flat" (zero everywhere) or "hills" (fixed undulation)

    Returns:
        Ground elevation.
    """
    if style == "flat":
        return 0.0
    return (
        sin(x * TerrainConfig.HILLS_X_FREQUENCY) * TerrainConfig.HILLS_X_AMPLITUDE
        + cos(z * TerrainConfig.HILLS_Z_FREQUENCY) * TerrainConfig.HILLS_Z_AMPLITUDE
        + sin((x + z) * TerrainConfig.HILLS_DIAGONAL_FREQUENCY) * TerrainConfig.HILLS_DIAGONAL_AMPLITUDE
    )


class ScatteredSurface:
    """Elevation surface through scattered survey points.

    Two interpolation methods:
        nearest_pair: Blend the two nearest points by inverse distance.
            A second point beyond the falloff distance is ignored. Past the
            falloff distance the value fades linearly to the default
            elevation, reaching it at twice the falloff distance.
        idw: Weight every point by 1/d², decayed by exp(-(d - falloff)/falloff)
            past the falloff distance, then normalize.

    Within the snap radius of a point, that point's elevation is returned.
    """

    def __init__(self, points: Sequence[SurfacePoint], options: SurfaceOptions = SurfaceOptions()) -> None:
        if len(points) < 2:
            raise ValueError(f"ScatteredSurface needs at least 2 points, got {len(points)}")
        self.options = options
        self._xz = np.array([(p.x, p.z) for p in points], dtype=float)
        self._elevations = np.array([p.elevation for p in points], dtype=float)
        self.default_elevation = (
            float(options.default_elevation)
            if options.default_elevation is not None
            else float(self._elevations.mean())
        )
        self._tree = cKDTree(self._xz)

    def __call__(self, x: float, z: float) -> float:
        if self.options.method == "idw":
            return self._inverse_distance(x, z)
        return self._nearest_pair(x, z)

    def _nearest_pair(self, x: float, z: float) -> float:
        falloff = self.options.falloff_distance
        dists, idxs = self._tree.query((x, z), k=2)
        d1, d2 = float(dists[0]), float(dists[1])
        e1, e2 = float(self._elevations[idxs[0]]), float(self._elevations[idxs[1]])

        if d1 < GISConfig.SNAP_RADIUS:
            return e1

        # A second point beyond the falloff is dropped without any pull toward the default;
        # the fade to the default applies only once the nearest point is beyond the falloff
        if d2 > falloff:
            near = e1
        else:
            w1 = d2 / (d1 + d2)
            near = e1 * w1 + e2 * (1 - w1)

        if d1 <= falloff:
            return near
        fade = max(0.0, 1 - (d1 - falloff) / falloff)
        return self.default_elevation + (near - self.default_elevation) * fade

    def _inverse_distance(self, x: float, z: float) -> float:
        falloff = self.options.falloff_distance
        d = np.hypot(self._xz[:, 0] - x, self._xz[:, 1] - z)

        nearest = int(np.argmin(d))
        if d[nearest] < GISConfig.SNAP_RADIUS:
            return float(self._elevations[nearest])

        weights = 1.0 / d**2
        beyond = d >= falloff
        weights[beyond] *= np.exp(-(d[beyond] - falloff) / falloff)

        total = float(weights.sum())
        if total == 0.0 or not isfinite(total):
            return self.default_elevation
        return float(np.dot(weights, self._elevations) / total)


def create_elevation_surface(points: Sequence[Any], options: SurfaceOptions = SurfaceOptions()) -> HeightFunction:
    """Build a height(x, z) function from scene-space survey points.

    Args:
        points: Objects with x, z and elevation attributes (e.g. converted GIS records)
        options: Interpolation method, falloff distance and default elevation

    Returns:
        Function mapping (x, z) to ground elevation.
    """
    surface_points = [SurfacePoint(x=float(p.x), z=float(p.z), elevation=float(p.elevation)) for p in points]

    if not surface_points:
        return lambda x, z: 0.0
    if len(surface_points) == 1:
        elevation = surface_points[0].elevation
        return lambda x, z: elevation

    return ScatteredSurface(points=surface_points, options=options)


# =============================================================================
# Profile layout (shared by the importer and rehydrated sources)
# =============================================================================


@dataclass(frozen=True)
class ProfileLayout:
    """An elevation profile placed in scene coordinates.

    Attributes:
        xs: Scene x of each profile point (sorted order of the input)
        ys: Normalized, height-scaled elevation of each profile point
        scale_x: Scene units per profile distance unit
        profile_length: Profile distance span (or index span without distances)
        min_distance: Profile distance mapped to the scene's left edge
        min_elevation: Elevation mapped to scene y = 0
    """

    xs: tuple[float, ...]
    ys: tuple[float, ...]
    scale_x: float
    profile_length: float
    min_distance: float
    min_elevation: float


def layout_profile(
    distances: Sequence[float],
    elevations: Sequence[float],
    options: ProfileTerrainOptions = ProfileTerrainOptions(),
) -> ProfileLayout:
    """Rescale profile distances to the scene width and normalize elevations.

    Scene x = (distance − min distance) · (scene_width / span), falling back to
    even index spacing when the distance span is zero. Scene y =
    (elevation − min elevation) · height_scale.

    Args:
        distances: Profile distances in input order
        elevations: Ground elevations in input order
        options: Scene width, depth, height scale and centering

    Returns:
        ProfileLayout with one (x, y) per input point.
    """
    n = len(distances)
    min_distance = min(distances)
    min_elevation = min(elevations)
    span = max(distances) - min_distance
    offset = options.scene_width / 2 if options.center_profile else 0.0

    if span > 0:
        profile_length = span
        scale_x = options.scene_width / span
        xs = tuple((d - min_distance) * scale_x - offset for d in distances)
    else:
        profile_length = float(n - 1)
        scale_x = options.scene_width / profile_length if profile_length > 0 else 1.0
        step = options.scene_width / (n - 1) if n > 1 else 0.0
        xs = tuple(i * step - offset for i in range(n))

    ys = tuple((e - min_elevation) * options.height_scale for e in elevations)
    return ProfileLayout(
        xs=xs,
        ys=ys,
        scale_x=scale_x,
        profile_length=profile_length,
        min_distance=min_distance,
        min_elevation=min_elevation,
    )


class ExtrudedProfileSurface:
    """An elevation profile along scene x, extruded across the scene depth.

    The profile carries no width information, so elevation does not vary
    with z: inside the depth band and beyond half the scene depth alike, a
    query returns the profile elevation at x (clamped to the profile's ends).
    """

    def __init__(self, layout: ProfileLayout) -> None:
        self.layout = layout
        self._profile = PiecewiseLinearProfile(zip(layout.xs, layout.ys))

    def __call__(self, x: float, z: float) -> float:
        return self._profile(x)


# =============================================================================
# Source values
# =============================================================================


@dataclass(frozen=True)
class FlatSource:
    """Procedural fallback ground (no explicit data)."""

    kind: ClassVar[str] = "flat"
    style: str = "flat"

    def __post_init__(self) -> None:
        if self.style not in TerrainConfig.TERRAIN_STYLES:
            raise ValueError(f"Invalid style '{self.style}'. Must be one of: {TerrainConfig.TERRAIN_STYLES}")

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "style": self.style}


@dataclass(frozen=True)
class PoleProfileSource:
    """Piecewise-linear surface through pole elevations along the depth axis.

    Attributes:
        knots: Literal (distance, elevation) pairs; distance runs along scene z
        terrain_offset_z: Terrain frame offset subtracted from z before lookup
    """

    kind: ClassVar[str] = "profile"
    knots: tuple[tuple[float, float], ...]
    terrain_offset_z: float = 0.0

    def __post_init__(self) -> None:
        if not self.knots:
            raise ValueError("PoleProfileSource needs at least one (distance, elevation) knot")

    @classmethod
    def from_poles(cls, poles: Iterable[Any], terrain_offset_z: float = 0.0) -> "PoleProfileSource":
        """Build from poles placed along z, using their base elevations."""
        knots = tuple(sorted(((float(p.z), float(p.elevation)) for p in poles), key=lambda k: k[0]))
        return cls(knots=knots, terrain_offset_z=terrain_offset_z)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "knots": [[d, e] for d, e in self.knots],
            "terrain_offset_z": self.terrain_offset_z,
        }


@dataclass(frozen=True)
class ElevationProfileSource:
    """Imported survey profile rescaled into the scene.

    Attributes:
        knots: Literal (distance, elevation) pairs in sorted profile order
        options: Scene layout the profile was imported with
    """

    kind: ClassVar[str] = "elevationProfile"
    knots: tuple[tuple[float, float], ...]
    options: ProfileTerrainOptions = field(default_factory=ProfileTerrainOptions)

    def __post_init__(self) -> None:
        if len(self.knots) < ProfileConfig.MIN_TERRAIN_POINTS:
            raise ValueError(
                f"ElevationProfileSource needs at least {ProfileConfig.MIN_TERRAIN_POINTS} knots, got {len(self.knots)}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "knots": [[d, e] for d, e in self.knots],
            "options": {
                "scene_width": self.options.scene_width,
                "scene_depth": self.options.scene_depth,
                "height_scale": self.options.height_scale,
                "center_profile": self.options.center_profile,
            },
        }


@dataclass(frozen=True)
class GISSource:
    """Scattered surface through converted GIS points.

    Attributes:
        points: Scene-space (x, z, elevation) samples
        options: Interpolation method and falloff
    """

    kind: ClassVar[str] = "gis"
    points: tuple[SurfacePoint, ...]
    options: SurfaceOptions = field(default_factory=SurfaceOptions)

    @classmethod
    def from_records(cls, records: Iterable[Any], options: SurfaceOptions = SurfaceOptions()) -> "GISSource":
        """Build from objects with x, z and elevation attributes."""
        points = tuple(SurfacePoint(x=float(r.x), z=float(r.z), elevation=float(r.elevation)) for r in records)
        return cls(points=points, options=options)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "points": [[p.x, p.z, p.elevation] for p in self.points],
            "options": {
                "method": self.options.method,
                "falloff_distance": self.options.falloff_distance,
                "default_elevation": self.options.default_elevation,
            },
        }


ElevationSource = Union[FlatSource, PoleProfileSource, ElevationProfileSource, GISSource]


def select_source(sources: Iterable[ElevationSource]) -> ElevationSource:
    """Pick the highest-priority configured source.

    Priority: gis > elevationProfile > profile > flat. With nothing
    configured, flat ground is used.
    """
    candidates = list(sources)
    if not candidates:
        return FlatSource()
    return min(candidates, key=lambda s: TerrainConfig.SOURCE_PRIORITY.index(s.kind))


def source_from_dict(data: dict[str, Any]) -> ElevationSource:
    """Rehydrate a terrain descriptor produced by a source's to_dict()."""
    kind = data["kind"]
    if kind == FlatSource.kind:
        return FlatSource(style=data.get("style", "flat"))
    if kind == PoleProfileSource.kind:
        return PoleProfileSource(
            knots=tuple((float(d), float(e)) for d, e in data["knots"]),
            terrain_offset_z=float(data.get("terrain_offset_z", 0.0)),
        )
    if kind == ElevationProfileSource.kind:
        return ElevationProfileSource(
            knots=tuple((float(d), float(e)) for d, e in data["knots"]),
            options=ProfileTerrainOptions(**data.get("options", {})),
        )
    if kind == GISSource.kind:
        return GISSource(
            points=tuple(SurfacePoint(x=float(x), z=float(z), elevation=float(e)) for x, z, e in data["points"]),
            options=SurfaceOptions(**data.get("options", {})),
        )
    raise ValueError(f"Unknown terrain kind '{kind}'. Must be one of: {TerrainConfig.SOURCE_PRIORITY}")


# =============================================================================
# Elevation model
# =============================================================================


class ElevationModel:
    """Single height(x, z) query over exactly one elevation source.

    The model is immutable: switching sources means building a new model,
    which fully replaces the previous surface.

    Example:
        model = ElevationModel(PoleProfileSource(knots=((0.0, 0.0), (100.0, 20.0))))
        model.height(x=0.0, z=50.0)  # 10.0
    """

    def __init__(self, source: Optional[ElevationSource] = None) -> None:
        self.source: ElevationSource = source if source is not None else FlatSource()
        self._surface, self.fallback_elevation = self._build(self.source)

    @classmethod
    def from_sources(cls, sources: Iterable[ElevationSource]) -> "ElevationModel":
        """Build from several configured sources, keeping the highest priority one."""
        return cls(select_source(sources))

    @property
    def kind(self) -> str:
        return self.source.kind

    @staticmethod
    def _build(source: ElevationSource) -> tuple[HeightFunction, float]:
        if isinstance(source, FlatSource):
            style = source.style
            return (lambda x, z: procedural_height(x, z, style=style)), 0.0

        if isinstance(source, PoleProfileSource):
            profile = PiecewiseLinearProfile(source.knots)
            offset = source.terrain_offset_z
            fallback = float(np.mean(profile.elevations))
            return (lambda x, z: profile(z - offset)), fallback

        if isinstance(source, ElevationProfileSource):
            distances = [d for d, _ in source.knots]
            elevations = [e for _, e in source.knots]
            layout = layout_profile(distances=distances, elevations=elevations, options=source.options)
            surface = ExtrudedProfileSurface(layout=layout)
            return surface, float(np.mean(layout.ys))

        if isinstance(source, GISSource):
            surface = create_elevation_surface(points=source.points, options=source.options)
            if isinstance(surface, ScatteredSurface):
                return surface, surface.default_elevation
            return surface, surface(0.0, 0.0)

        raise TypeError(f"Unsupported elevation source: {source!r}")

    def height(self, x: float, z: float) -> float:
        """Ground elevation at scene position (x, z). Never raises, never NaN."""
        if isnan(x) or isnan(z):
            return self.fallback_elevation
        x = min(max(x, -MAX_COORDINATE), MAX_COORDINATE)
        z = min(max(z, -MAX_COORDINATE), MAX_COORDINATE)

        value = self._surface(x, z)
        if not isfinite(value):
            logger.debug(f"Non-finite {self.kind} elevation at ({x}, {z}); using fallback {self.fallback_elevation}")
            return self.fallback_elevation
        return value

    def __call__(self, x: float, z: float) -> float:
        return self.height(x, z)

    def to_dict(self) -> dict[str, Any]:
        """Terrain descriptor naming the source kind and its data."""
        return self.source.to_dict()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ElevationModel":
        return cls(source_from_dict(data))

    def __repr__(self) -> str:
        return f"ElevationModel({self.kind})"

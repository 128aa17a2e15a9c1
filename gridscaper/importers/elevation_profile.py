"""Elevation profile import: ground profile exports to a terrain surface.

Profile exports (ArcGIS, QGIS, ...) list ground elevation at increasing
distance along a line, optionally with projected X/Y coordinates. The
profile is rescaled to the scene width along x and extruded across the
scene depth along z.

Column detection (header row required), each column takes the first role it
matches:
- elevation: contains "elevation", "elev" or "ground" (or is "d")
- distance: contains "distance" or "dist" (or is "c")
- x / y: named "x" / "y" (optionally with a unit suffix), or "a" / "b"
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from gridscaper.constants import ProfileConfig
from gridscaper.core.elevation_model import (
    ElevationModel,
    ElevationProfileSource,
    ProfileTerrainOptions,
    layout_profile,
)
from gridscaper.core.errors import InvalidInputData
from gridscaper.importers.csv_table import cell, normalize_headers, parse_number, split_fields, split_lines
from gridscaper.importers.validation import ValidationResult
from gridscaper.model.profile_point import ProfilePoint
from gridscaper.model.warning import (
    DataWarning,
    FewPointsWarning,
    FlatElevationWarning,
    LargeElevationRangeWarning,
    MissingDistanceWarning,
    SkippedRowWarning,
    UnparsableValueWarning,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Parsing
# =============================================================================


@dataclass(frozen=True)
class ValueRange:
    """min / max / span of a series."""

    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    @classmethod
    def of(cls, values: Sequence[float]) -> "ValueRange":
        return cls(min=min(values), max=max(values))


@dataclass(frozen=True)
class ProfileStats:
    """Summary statistics of a parsed profile."""

    point_count: int
    elevation_range: ValueRange
    distance_range: ValueRange
    average_elevation: float


@dataclass
class ParsedProfile:
    """Parsed elevation profile.

    Attributes:
        points: Valid points, sorted by distance when the file has a distance column
        headers: Original header cells
        stats: Elevation and distance ranges
        has_coordinates: File carries X and Y columns
        has_distance: File carries a distance column
        warnings: Skipped rows and defaulted values
    """

    points: list[ProfilePoint]
    headers: list[str]
    stats: ProfileStats
    has_coordinates: bool
    has_distance: bool
    warnings: list[DataWarning] = field(default_factory=list)


def _is_axis_header(header: str, axis: str, alias: str) -> bool:
    if header in (axis, alias):
        return True
    return any(header.startswith(axis + separator) for separator in (" ", "_", "("))


def detect_profile_columns(header_cells: Sequence[str]) -> dict[str, int]:
    """Map profile column roles to indices from lowercased header cells."""
    columns: dict[str, int] = {}
    for index, header in enumerate(header_cells):
        if any(keyword in header for keyword in ProfileConfig.ELEVATION_KEYWORDS) or header == ProfileConfig.ELEVATION_ALIAS:
            role = "elevation"
        elif any(keyword in header for keyword in ProfileConfig.DISTANCE_KEYWORDS) or header == ProfileConfig.DISTANCE_ALIAS:
            role = "distance"
        elif _is_axis_header(header, axis="x", alias=ProfileConfig.X_ALIAS):
            role = "x"
        elif _is_axis_header(header, axis="y", alias=ProfileConfig.Y_ALIAS):
            role = "y"
        else:
            continue
        columns.setdefault(role, index)
    return columns


def parse_elevation_profile(csv_text: str) -> ParsedProfile:
    """Parse an elevation profile export.

    Args:
        csv_text: Raw CSV content with a header row

    Returns:
        ParsedProfile with points, statistics and warnings.

    Raises:
        InvalidInputData: If there is no header/data, no elevation column, or
            no valid rows.
    """
    lines = split_lines(csv_text)
    if len(lines) < 2:
        raise InvalidInputData("Elevation profile must contain header and data rows")

    headers = split_fields(lines[0][1])
    columns = detect_profile_columns(normalize_headers(lines[0][1]))
    if "elevation" not in columns:
        raise InvalidInputData(
            'No elevation column found. Expected column containing "elevation", "elev", or "ground"'
        )

    has_coordinates = "x" in columns and "y" in columns
    has_distance = "distance" in columns

    warnings: list[DataWarning] = []
    if not has_distance:
        warnings.append(MissingDistanceWarning())

    points: list[ProfilePoint] = []
    for index, (line_number, line) in enumerate(lines[1:]):
        values = split_fields(line)
        if len(values) < len(headers):
            warnings.append(
                SkippedRowWarning(line_number=line_number, reason=f"{len(values)} fields, header has {len(headers)}")
            )
            continue

        x = y = None
        if has_coordinates:
            x = parse_number(cell(values, columns["x"]))
            y = parse_number(cell(values, columns["y"]))
            if x is None or y is None:
                warnings.append(SkippedRowWarning(line_number=line_number, reason="invalid x/y coordinates"))
                continue

        if has_distance:
            distance_text = cell(values, columns["distance"])
            distance = parse_number(distance_text)
            if distance is None:
                warnings.append(
                    UnparsableValueWarning(line_number=line_number, column="distance", value=distance_text, default=0.0)
                )
                distance = 0.0
        else:
            distance = float(len(points))

        elevation_text = cell(values, columns["elevation"])
        elevation = parse_number(elevation_text)
        if elevation is None:
            warnings.append(SkippedRowWarning(line_number=line_number, reason=f"invalid elevation '{elevation_text}'"))
            continue

        points.append(ProfilePoint(distance=distance, elevation=elevation, index=index, x=x, y=y))

    for warning in warnings:
        logger.warning(warning.message)

    if not points:
        raise InvalidInputData("No valid elevation data found")

    if has_distance:
        points.sort(key=lambda p: p.distance)

    elevations = [p.elevation for p in points]
    stats = ProfileStats(
        point_count=len(points),
        elevation_range=ValueRange.of(elevations),
        distance_range=ValueRange.of([p.distance for p in points]),
        average_elevation=sum(elevations) / len(elevations),
    )

    logger.info(
        f"Parsed elevation profile: {stats.point_count} points, "
        f"elevation {stats.elevation_range.min:.1f}-{stats.elevation_range.max:.1f}"
    )
    return ParsedProfile(
        points=points,
        headers=headers,
        stats=stats,
        has_coordinates=has_coordinates,
        has_distance=has_distance,
        warnings=warnings,
    )


# =============================================================================
# Terrain construction
# =============================================================================


@dataclass(frozen=True)
class SceneProfilePoint:
    """A profile point placed in the scene (on the z = 0 centerline)."""

    x: float
    y: float
    z: float
    original_elevation: float
    distance: float
    index: int


@dataclass(frozen=True)
class SceneBounds:
    """Axis-aligned extent of the profile terrain."""

    x_min: float
    x_max: float
    z_min: float
    z_max: float
    y_min: float
    y_max: float


@dataclass(frozen=True)
class ProfileTerrainMetadata:
    """How the profile was mapped into the scene."""

    original_stats: ProfileStats
    scale_factor_x: float
    height_scale: float
    scene_width: float
    scene_depth: float
    profile_length: float
    point_count: int


@dataclass
class ProfileTerrain:
    """Terrain built from an elevation profile.

    Attributes:
        elevation_function: Ground height at scene (x, z)
        elevation_model: The ElevationModel behind elevation_function
        profile_points: Profile points in scene coordinates
        bounds: Scene extent of the terrain
        metadata: Scaling details
    """

    elevation_function: Callable[[float, float], float]
    elevation_model: ElevationModel
    profile_points: list[SceneProfilePoint]
    bounds: SceneBounds
    metadata: ProfileTerrainMetadata


def create_terrain_from_profile(
    parsed: ParsedProfile,
    options: ProfileTerrainOptions = ProfileTerrainOptions(),
) -> ProfileTerrain:
    """Build a terrain surface from a parsed elevation profile.

    Args:
        parsed: Output of parse_elevation_profile
        options: Scene width, depth, height scale and centering

    Returns:
        ProfileTerrain whose elevation function interpolates the profile along x.

    Raises:
        InvalidInputData: If the profile has fewer than two points.
    """
    points = parsed.points
    if len(points) < ProfileConfig.MIN_TERRAIN_POINTS:
        raise InvalidInputData(
            f"Need at least {ProfileConfig.MIN_TERRAIN_POINTS} elevation points to create terrain, got {len(points)}"
        )

    distances = [p.distance for p in points]
    elevations = [p.elevation for p in points]
    layout = layout_profile(distances=distances, elevations=elevations, options=options)

    profile_points = [
        SceneProfilePoint(x=x, y=y, z=0.0, original_elevation=p.elevation, distance=p.distance, index=i)
        for i, (p, x, y) in enumerate(zip(points, layout.xs, layout.ys))
    ]

    source = ElevationProfileSource(knots=tuple(zip(distances, elevations)), options=options)
    model = ElevationModel(source)

    x_min = -options.scene_width / 2 if options.center_profile else 0.0
    bounds = SceneBounds(
        x_min=x_min,
        x_max=x_min + options.scene_width,
        z_min=-options.scene_depth / 2,
        z_max=options.scene_depth / 2,
        y_min=min(layout.ys),
        y_max=max(layout.ys),
    )
    metadata = ProfileTerrainMetadata(
        original_stats=parsed.stats,
        scale_factor_x=layout.scale_x,
        height_scale=options.height_scale,
        scene_width=options.scene_width,
        scene_depth=options.scene_depth,
        profile_length=layout.profile_length,
        point_count=len(points),
    )

    logger.info(
        f"Created profile terrain: {len(points)} points over {layout.profile_length:.1f}, "
        f"x scale {layout.scale_x:.4f}, height {bounds.y_min:.1f}-{bounds.y_max:.1f}"
    )
    return ProfileTerrain(
        elevation_function=model.height,
        elevation_model=model,
        profile_points=profile_points,
        bounds=bounds,
        metadata=metadata,
    )


# =============================================================================
# Validation and sample data
# =============================================================================


def validate_elevation_profile(csv_text: str) -> ValidationResult:
    """Dry-run a profile import and report problems without raising."""
    if not csv_text or not csv_text.strip():
        return ValidationResult(success=False, errors=["File is empty"])
    if len(split_lines(csv_text)) < 2:
        return ValidationResult(success=False, errors=["File must contain header and at least one data row"])

    try:
        parsed = parse_elevation_profile(csv_text)
    except InvalidInputData as e:
        return ValidationResult(success=False, errors=[f"Parsing error: {e}"])

    warnings = list(parsed.warnings)
    stats = parsed.stats
    if stats.point_count < ProfileConfig.FEW_POINTS:
        warnings.append(FewPointsWarning(count=stats.point_count, recommended=ProfileConfig.FEW_POINTS))
    if stats.elevation_range.span == 0:
        warnings.append(FlatElevationWarning(elevation=stats.elevation_range.min))
    if stats.elevation_range.span > ProfileConfig.LARGE_ELEVATION_SPAN:
        warnings.append(
            LargeElevationRangeWarning(
                elevation_span=stats.elevation_range.span, threshold=ProfileConfig.LARGE_ELEVATION_SPAN
            )
        )

    return ValidationResult(
        success=True,
        warnings=warnings,
        summary={
            "point_count": stats.point_count,
            "elevation_min": stats.elevation_range.min,
            "elevation_max": stats.elevation_range.max,
            "elevation_span": stats.elevation_range.span,
            "distance_span": stats.distance_range.span if parsed.has_distance else None,
            "has_coordinates": parsed.has_coordinates,
        },
    )


SAMPLE_PROFILE_ROWS = [
    ("X", "Y", "Distance (feet)", "Ground Elevation (feet)"),
    ("-13039679.78", "4033348.471009304", "0", "1920.5749493051175"),
    ("-13039674.76", "4033345.625110424", "15.68244169816272", "1908.5749493051175"),
    ("-13039672.25", "4033344.202160415", "25.36226247244096", "1911.852349186774"),
    ("-13039669.75", "4033342.779210407", "35.06629359245458", "1915.062910132275"),
    ("-13039664.73", "4033339.933330393", "54.70712494894819", "1917.5969107473642"),
    ("-13039662.22", "4033338.510356836", "64.88845144356556", "1918.2560030464674"),
    ("-13039659.71", "4033337.087404675", "75.07226567925091", "1918.7507327439394"),
    ("-13039657.2", "4033335.664452889", "85.25608611737226", "1918.8709450107747"),
    ("-13039652.18", "4033332.818546675", "105.6253286839850", "1918.7760205060825"),
    ("-13039649.68", "4033331.395592492", "115.8094488188967", "1918.6474364267234"),
    ("-13039647.17", "4033329.972638441", "125.9935589538077", "1918.7973125154301"),
    ("-13039642.15", "4033327.126736942", "146.3617811036236", "1919.365652438063"),
    ("-13039639.64", "4033325.704", "156.5459372555301", "1909.682266204255"),
    ("-13039637.13", "4033324.280524252", "166.7300929439855", "1906.902329630058"),
    ("-13039634.62", "4033322.857866472", "176.9142732834456", "1901.489985048547"),
    ("-13039629.61", "4033320.011952176", "197.2826441698127", "1891.565915517697"),
    ("-13039627.1", "4033318.588955338", "207.4668536307066", "1887.590128940841"),
    ("-13039624.59", "4033317.166038111", "217.6510661679900", "1885.316149917431"),
    ("-13039622.08", "4033315.743065084", "227.8352776928771", "1884.2619334637718"),
    ("-13039617.06", "4033312.897164167", "248.2036130727034", "1891.534835024984"),
    ("-13039614.55", "4033311.474248275", "258.3878217615515", "1896.692390453604"),
    ("-13039612.04", "4033310.051258504", "268.57202542451569", "1901.056121237399"),
    ("-13039607.03", "4033307.205326927", "288.9395013235995", "1903.644370505608"),
    ("-13039604.52", "4033305.782366668", "299.12356916955433", "1904.7397616965543"),
]


def generate_sample_elevation_profile() -> str:
    """Sample profile export: 24 ground samples over about 300 feet."""
    return "\n".join(",".join(row) for row in SAMPLE_PROFILE_ROWS)

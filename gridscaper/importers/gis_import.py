"""GIS point import: CSV survey exports to scene-space poles.

Pipeline:
1. parse_gis_data: CSV text -> GISRecords (lat, lng, elevation, height, id)
2. convert_to_scene_coordinates: records -> planar scene positions in feet,
   optionally scaled to fit the scene, plus conversion metadata
3. create_elevation_surface (core.elevation_model): scene records -> height(x, z)

Column detection: if the first line names a known column and holds no numbers it is a
header and each column is assigned the first role it matches (lat, lng,
elevation, height, id). Otherwise columns are read as lat, lng, elevation,
height.

Rows that cannot become a valid record are skipped with a warning; the import
only fails when no valid record remains.
"""

import logging
from dataclasses import dataclass, field
from math import hypot
from typing import Optional, Sequence

from gridscaper.constants import GISConfig
from gridscaper.core.errors import InvalidInputData
from gridscaper.core.geo_calculator import GeoCalculator
from gridscaper.importers.csv_table import cell, normalize_headers, parse_number, split_fields, split_lines
from gridscaper.importers.validation import ValidationResult, validate_geographic_record
from gridscaper.model.gis_record import GISRecord
from gridscaper.model.warning import (
    DataWarning,
    FlatElevationWarning,
    MissingColumnWarning,
    SinglePointWarning,
    SkippedRowWarning,
    TightClusterWarning,
    WideSpreadWarning,
)

logger = logging.getLogger(__name__)

_ROLE_KEYWORDS = {
    "lat": GISConfig.LAT_KEYWORDS,
    "lng": GISConfig.LNG_KEYWORDS,
    "elevation": GISConfig.ELEVATION_KEYWORDS,
    "height": GISConfig.HEIGHT_KEYWORDS,
    "id": GISConfig.ID_KEYWORDS,
}


# =============================================================================
# Parsing
# =============================================================================


@dataclass
class GISParseResult:
    """Parsed GIS data.

    Attributes:
        records: Valid records in file order
        headers: Original header cells, or None for a headerless file
        total_rows: Data rows examined (excluding header and blank lines)
        warnings: Skipped rows and defaulted columns
    """

    records: list[GISRecord]
    headers: Optional[list[str]]
    total_rows: int
    warnings: list[DataWarning] = field(default_factory=list)

    @property
    def valid_count(self) -> int:
        return len(self.records)


def detect_columns(header_cells: Sequence[str]) -> dict[str, int]:
    """Map column roles to indices from lowercased header cells.

    Each column takes the first role whose keyword it contains, and each role
    keeps the first column that claims it. "pole_height" is therefore a
    height column, not an id column.
    """
    columns: dict[str, int] = {}
    for index, header in enumerate(header_cells):
        for role, keywords in _ROLE_KEYWORDS.items():
            if any(keyword in header for keyword in keywords):
                columns.setdefault(role, index)
                break
    return columns


def _looks_like_header(header_cells: Sequence[str]) -> bool:
    """A header names at least one known column and holds no numbers."""
    if any(parse_number(header) is not None for header in header_cells):
        return False
    return any(
        keyword in header for header in header_cells for keywords in _ROLE_KEYWORDS.values() for keyword in keywords
    )


def parse_gis_data(csv_text: str) -> GISParseResult:
    """Parse GIS CSV text into pole records.

    Args:
        csv_text: Raw CSV content

    Returns:
        GISParseResult with the valid records and any warnings.

    Raises:
        InvalidInputData: If the text is empty, has no lat/lng columns, or
            contains no valid rows.
    """
    lines = split_lines(csv_text)
    if not lines:
        raise InvalidInputData("GIS CSV is empty")

    first_cells = normalize_headers(lines[0][1])
    has_headers = _looks_like_header(first_cells)
    if has_headers:
        columns = detect_columns(first_cells)
        headers: Optional[list[str]] = split_fields(lines[0][1])
        data_lines = lines[1:]
    else:
        columns = {role: index for index, role in enumerate(GISConfig.FALLBACK_COLUMNS)}
        headers = None
        data_lines = lines

    if "lat" not in columns or "lng" not in columns:
        raise InvalidInputData(f"No latitude/longitude columns found in header: {headers}")

    warnings: list[DataWarning] = []
    if "elevation" not in columns:
        warnings.append(MissingColumnWarning(column="elevation", default=0.0))

    records: list[GISRecord] = []
    for line_number, line in data_lines:
        values = split_fields(line)
        if len(values) < GISConfig.MIN_FIELDS_PER_ROW:
            warnings.append(
                SkippedRowWarning(
                    line_number=line_number,
                    reason=f"only {len(values)} fields, need at least {GISConfig.MIN_FIELDS_PER_ROW}",
                )
            )
            continue

        lat_text = cell(values, columns["lat"])
        lng_text = cell(values, columns["lng"])
        lat = parse_number(lat_text) if lat_text is not None else None
        lng = parse_number(lng_text) if lng_text is not None else None

        elevation = 0.0
        elevation_text = cell(values, columns.get("elevation"))
        if elevation_text:
            parsed = parse_number(elevation_text)
            elevation = parsed if parsed is not None else float("nan")

        problem = validate_geographic_record(line_number=line_number, lat=lat, lng=lng, elevation=elevation)
        if problem is not None:
            warnings.append(problem)
            continue

        height = GISConfig.DEFAULT_POLE_HEIGHT
        height_text = cell(values, columns.get("height"))
        if height_text:
            parsed_height = parse_number(height_text)
            if parsed_height is not None and parsed_height > 0:
                height = parsed_height

        pole_id = cell(values, columns.get("id")) or f"{GISConfig.ID_PREFIX}{len(records) + 1}"

        records.append(
            GISRecord(
                id=pole_id,
                lat=lat,
                lng=lng,
                elevation=elevation,
                height=height,
                line_number=line_number,
            )
        )

    for warning in warnings:
        logger.warning(warning.message)

    if not records:
        raise InvalidInputData("No valid pole data found in CSV. Please check the format.")

    logger.info(f"Parsed {len(records)} GIS records from {len(data_lines)} rows")
    return GISParseResult(records=records, headers=headers, total_rows=len(data_lines), warnings=warnings)


# =============================================================================
# Scene conversion
# =============================================================================


@dataclass(frozen=True)
class ConversionOptions:
    """Geographic to scene conversion settings.

    Attributes:
        scale_to_fit: Scale so the larger geographic extent spans max_scene_size
        max_scene_size: Target scene extent when scaling to fit (feet)
        scale_factor: Fixed scale used when scale_to_fit is off
        center_origin: Center the points on the scene origin; otherwise shift
            so all coordinates are non-negative
        round_decimals: Round scene coordinates to this many decimals (None = no rounding)
    """

    scale_to_fit: bool = True
    max_scene_size: float = GISConfig.MAX_SCENE_SIZE
    scale_factor: float = 1.0
    center_origin: bool = True
    round_decimals: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.max_scene_size > 0:
            raise ValueError(f"max_scene_size must be positive, got {self.max_scene_size}")
        if not self.scale_factor > 0:
            raise ValueError(f"scale_factor must be positive, got {self.scale_factor}")
        if self.round_decimals is not None and self.round_decimals < 0:
            raise ValueError(f"round_decimals must be non-negative, got {self.round_decimals}")


@dataclass(frozen=True)
class GeoBounds:
    """Geographic and elevation extent of a record set."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float
    min_elevation: float
    max_elevation: float

    @classmethod
    def of(cls, records: Sequence[GISRecord]) -> "GeoBounds":
        lats = [r.lat for r in records]
        lngs = [r.lng for r in records]
        elevations = [r.elevation for r in records]
        return cls(
            min_lat=min(lats),
            max_lat=max(lats),
            min_lng=min(lngs),
            max_lng=max(lngs),
            min_elevation=min(elevations),
            max_elevation=max(elevations),
        )

    @property
    def center(self) -> tuple[float, float]:
        """(lat, lng) midpoint of the bounding box."""
        return (self.min_lat + self.max_lat) / 2, (self.min_lng + self.max_lng) / 2

    @property
    def lat_spread(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lng_spread(self) -> float:
        return self.max_lng - self.min_lng

    @property
    def elevation_range(self) -> float:
        return self.max_elevation - self.min_elevation


@dataclass(frozen=True)
class ConversionMetadata:
    """Summary of a scene conversion.

    Attributes:
        bounds: Original geographic bounds
        center: (lat, lng) mapped to the scene origin before any shift
        scale_factor: Scene units per foot
        total_distance: Scene length of the line through the records in order
        overall_bearing: Bearing in degrees from the first to the last record
        elevation_range: max - min elevation
        scene_width: x extent of the converted points
        scene_depth: z extent of the converted points
    """

    bounds: GeoBounds
    center: tuple[float, float]
    scale_factor: float
    total_distance: float
    overall_bearing: float
    elevation_range: float
    scene_width: float
    scene_depth: float


@dataclass
class SceneConversion:
    """Converted records plus metadata."""

    records: list[GISRecord]
    metadata: ConversionMetadata


def convert_to_scene_coordinates(
    records: Sequence[GISRecord],
    options: ConversionOptions = ConversionOptions(),
) -> SceneConversion:
    """Project geographic records into scene coordinates.

    Each record is placed by its Haversine distance and initial bearing from
    the bounding-box center: east is +x and north is +z, in feet, times the
    scale factor. With scale_to_fit, the scale makes the larger of the
    north-south and east-west spans (measured through the center) equal
    max_scene_size.

    Args:
        records: Parsed GIS records, in line order
        options: Scaling, centering and rounding settings

    Returns:
        SceneConversion with new records carrying x, z and cumulative distance.

    Raises:
        InvalidInputData: If no records are given.
    """
    if not records:
        raise InvalidInputData("No GIS data provided for conversion")

    bounds = GeoBounds.of(records)
    center_lat, center_lng = bounds.center

    lat_span_ft = GeoCalculator.haversine_distance_ft(
        lat1=bounds.min_lat, lng1=center_lng, lat2=bounds.max_lat, lng2=center_lng
    )
    lng_span_ft = GeoCalculator.haversine_distance_ft(
        lat1=center_lat, lng1=bounds.min_lng, lat2=center_lat, lng2=bounds.max_lng
    )
    max_span_ft = max(lat_span_ft, lng_span_ft)

    if options.scale_to_fit and max_span_ft > 0:
        scale = options.max_scene_size / max_span_ft
    else:
        scale = options.scale_factor

    positions = []
    for record in records:
        x_ft, z_ft = GeoCalculator.local_offset_ft(
            center_lat=center_lat, center_lng=center_lng, lat=record.lat, lng=record.lng
        )
        positions.append((x_ft * scale, z_ft * scale))

    if not options.center_origin:
        min_x = min(x for x, _ in positions)
        min_z = min(z for _, z in positions)
        positions = [(x - min_x, z - min_z) for x, z in positions]

    if options.round_decimals is not None:
        positions = [(round(x, options.round_decimals), round(z, options.round_decimals)) for x, z in positions]

    converted: list[GISRecord] = []
    total_distance = 0.0
    for index, (record, (x, z)) in enumerate(zip(records, positions)):
        if index > 0:
            prev_x, prev_z = positions[index - 1]
            total_distance += hypot(x - prev_x, z - prev_z)
        converted.append(record.with_scene_position(x=x, z=z, cumulative_distance=total_distance))

    first, last = records[0], records[-1]
    overall_bearing = GeoCalculator.initial_bearing_deg(lat1=first.lat, lng1=first.lng, lat2=last.lat, lng2=last.lng)

    xs = [x for x, _ in positions]
    zs = [z for _, z in positions]
    metadata = ConversionMetadata(
        bounds=bounds,
        center=(center_lat, center_lng),
        scale_factor=scale,
        total_distance=total_distance,
        overall_bearing=overall_bearing,
        elevation_range=bounds.elevation_range,
        scene_width=max(xs) - min(xs),
        scene_depth=max(zs) - min(zs),
    )

    logger.info(
        f"Converted {len(converted)} GIS records: scale {scale:.6f}, "
        f"footprint {metadata.scene_width:.1f} x {metadata.scene_depth:.1f}, bearing {overall_bearing:.0f}°"
    )
    return SceneConversion(records=converted, metadata=metadata)


# =============================================================================
# Validation and sample data
# =============================================================================


def validate_gis_data(csv_text: str) -> ValidationResult:
    """Dry-run a GIS import and report problems without raising.

    Returns:
        ValidationResult with blocking errors, advisory warnings and a summary
        (pole count, lat/lng spread, elevation range).
    """
    if not csv_text or not csv_text.strip():
        return ValidationResult(success=False, errors=["File is empty"])
    if len(split_lines(csv_text)) < 2:
        return ValidationResult(success=False, errors=["File must contain at least 2 lines (header + data)"])

    try:
        parsed = parse_gis_data(csv_text)
    except InvalidInputData as e:
        return ValidationResult(success=False, errors=[f"Parsing error: {e}"])

    warnings = list(parsed.warnings)
    bounds = GeoBounds.of(parsed.records)

    if parsed.valid_count < 2:
        warnings.append(SinglePointWarning())
    if bounds.lat_spread < GISConfig.TIGHT_CLUSTER_DEG and bounds.lng_spread < GISConfig.TIGHT_CLUSTER_DEG:
        warnings.append(TightClusterWarning(lat_spread_deg=bounds.lat_spread, lng_spread_deg=bounds.lng_spread))
    if bounds.lat_spread > GISConfig.WIDE_SPREAD_DEG or bounds.lng_spread > GISConfig.WIDE_SPREAD_DEG:
        warnings.append(WideSpreadWarning(lat_spread_deg=bounds.lat_spread, lng_spread_deg=bounds.lng_spread))
    if bounds.elevation_range == 0:
        warnings.append(FlatElevationWarning(elevation=bounds.min_elevation))

    return ValidationResult(
        success=True,
        warnings=warnings,
        summary={
            "total_poles": parsed.valid_count,
            "lat_range": bounds.lat_spread,
            "lng_range": bounds.lng_spread,
            "elevation_range": bounds.elevation_range,
        },
    )


SAMPLE_GIS_ROWS = [
    ("lat", "lng", "elevation", "pole_height", "pole_id"),
    (33.937721, -116.527342, 1050, 25, "POLE_001"),
    (33.937721, -116.527322, 1048, 25, "POLE_002"),
    (33.936328, -116.527344, 1045, 20, "POLE_003"),
    (33.933478, -116.527267, 1040, 30, "POLE_004"),
    (33.934119, -116.527262, 1042, 25, "POLE_005"),
    (33.934872, -116.527346, 1044, 25, "POLE_006"),
    (33.937032, -116.527343, 1049, 25, "POLE_007"),
    (33.935559, -116.527345, 1046, 20, "POLE_008"),
]


def generate_sample_gis_data() -> str:
    """Sample GIS CSV with eight surveyed poles."""
    return "\n".join(",".join(str(value) for value in row) for row in SAMPLE_GIS_ROWS)

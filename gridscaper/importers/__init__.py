"""CSV importers for survey data.

- gis_import: GIS pole surveys (lat, lng, elevation) to scene coordinates
- elevation_profile: Ground elevation profiles to extruded terrain
"""

from gridscaper.importers.elevation_profile import (
    ParsedProfile,
    ProfileTerrain,
    create_terrain_from_profile,
    generate_sample_elevation_profile,
    parse_elevation_profile,
    validate_elevation_profile,
)
from gridscaper.importers.gis_import import (
    ConversionOptions,
    GISParseResult,
    SceneConversion,
    convert_to_scene_coordinates,
    generate_sample_gis_data,
    parse_gis_data,
    validate_gis_data,
)
from gridscaper.importers.validation import ValidationResult, validate_geographic_record

__all__ = [
    "parse_gis_data",
    "convert_to_scene_coordinates",
    "validate_gis_data",
    "generate_sample_gis_data",
    "ConversionOptions",
    "GISParseResult",
    "SceneConversion",
    "parse_elevation_profile",
    "create_terrain_from_profile",
    "validate_elevation_profile",
    "generate_sample_elevation_profile",
    "ParsedProfile",
    "ProfileTerrain",
    "ValidationResult",
    "validate_geographic_record",
]

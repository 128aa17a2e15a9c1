"""Configuration constants for GridScaper.

All tunable parameters of the geometry engine are centralized here.

Classes:
    UnitConfig: Unit conversions and Earth model
    CatenaryConfig: Newton-Raphson solver parameters
    ConductorConfig: Sag model constants, sampling and crossarm layout
    ClearanceConfig: Ground clearance thresholds
    TerrainConfig: Procedural terrain and source priority
    GISConfig: GIS import column detection, defaults and scene scaling
    ProfileConfig: Elevation profile column detection and scene layout
"""


class UnitConfig:
    """Unit conversions and Earth model."""

    # WGS84 equatorial radius, used for all Haversine calculations
    EARTH_RADIUS_M = 6_378_137.0

    FEET_PER_METER = 3.28084


class CatenaryConfig:
    """Newton-Raphson catenary solver parameters."""

    # Stop when the parameter update falls below this (scene units)
    TOLERANCE = 0.001
    MAX_ITERATIONS = 20

    # Lower clamp on the solver's target sag after tension scaling.
    # Keeps the parabolic seed L²/(8s) finite for very high tension factors.
    MIN_TARGET_SAG = 1e-4

    # Horizontal span lengths below this are treated as this value
    SPAN_EPSILON = 1e-6

    # Upper bound on L/(2a); math.cosh overflows just above 710
    MAX_HALF_SPAN_RATIO = 700.0


class ConductorConfig:
    """Conductor curve construction parameters."""

    # Base sag = max(MIN_SAG, span * BASE_SAG_FACTOR) / tension
    MIN_SAG = 0.1
    BASE_SAG_FACTOR = 0.05

    DEFAULT_TENSION = 1.0
    DEFAULT_SAMPLES = 32

    # Lateral positions on a standard three-wire crossarm (left, center, right)
    CROSSARM_OFFSETS = (-1.2, 0.0, 1.2)

    # Pole height limits for interactive placement
    MIN_POLE_HEIGHT = 1.0
    MAX_POLE_HEIGHT = 40.0
    DEFAULT_POLE_HEIGHT = 10.0

    SAG_MODELS = ["catenary", "sine"]


assert ConductorConfig.MIN_POLE_HEIGHT <= ConductorConfig.DEFAULT_POLE_HEIGHT <= ConductorConfig.MAX_POLE_HEIGHT
assert ConductorConfig.MIN_SAG > CatenaryConfig.MIN_TARGET_SAG


class ClearanceConfig:
    """Ground clearance evaluation parameters."""

    # Minimum allowed vertical distance between conductor and ground (scene units)
    DEFAULT_THRESHOLD = 15.0


class TerrainConfig:
    """Procedural terrain and elevation source selection."""

    TERRAIN_STYLES = ["flat", "hills"]

    # Synthetic undulation for the "hills" style:
    # h(x, z) = sin(x*KX)*AX + cos(z*KZ)*AZ + sin((x+z)*KXZ)*AXZ
    HILLS_X_FREQUENCY = 0.09
    HILLS_X_AMPLITUDE = 5.0
    HILLS_Z_FREQUENCY = 0.11
    HILLS_Z_AMPLITUDE = 3.0
    HILLS_DIAGONAL_FREQUENCY = 0.04
    HILLS_DIAGONAL_AMPLITUDE = 2.0

    # Highest priority first: exactly one source is active at a time
    SOURCE_PRIORITY = ["gis", "elevationProfile", "profile", "flat"]


class GISConfig:
    """GIS point import and scattered-surface parameters."""

    # Header substrings identifying each column role (first matching role wins)
    LAT_KEYWORDS = ("lat",)
    LNG_KEYWORDS = ("lng", "lon")
    ELEVATION_KEYWORDS = ("elev", "altitude")
    HEIGHT_KEYWORDS = ("height",)
    ID_KEYWORDS = ("id", "name", "pole")

    # Column order assumed when the first line is not a recognizable header
    FALLBACK_COLUMNS = ("lat", "lng", "elevation", "height")

    MIN_FIELDS_PER_ROW = 3
    DEFAULT_POLE_HEIGHT = ConductorConfig.DEFAULT_POLE_HEIGHT
    ID_PREFIX = "Pole_"

    # Scene conversion
    MAX_SCENE_SIZE = 200.0

    # Scattered surface interpolation
    SURFACE_METHODS = ["nearest_pair", "idw"]
    FALLOFF_DISTANCE = 100.0
    SNAP_RADIUS = 0.1

    # Advisory validation thresholds (degrees / elevation units)
    TIGHT_CLUSTER_DEG = 0.0001
    WIDE_SPREAD_DEG = 1.0


class ProfileConfig:
    """Elevation profile import and terrain construction parameters."""

    ELEVATION_KEYWORDS = ("elevation", "elev", "ground")
    DISTANCE_KEYWORDS = ("distance", "dist")

    # Spreadsheet-style fallback column letters (A=x, B=y, C=distance, D=elevation)
    X_ALIAS = "a"
    Y_ALIAS = "b"
    DISTANCE_ALIAS = "c"
    ELEVATION_ALIAS = "d"

    SCENE_WIDTH = 200.0
    SCENE_DEPTH = 100.0
    HEIGHT_SCALE = 1.0

    MIN_TERRAIN_POINTS = 2

    # Advisory validation thresholds
    FEW_POINTS = 3
    LARGE_ELEVATION_SPAN = 1000.0

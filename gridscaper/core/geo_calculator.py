"""Geodesic calculations for GIS import.

Provides geographic helper functions for placing surveyed poles in the scene:
- Distance calculation (Haversine formula)
- Bearing calculation (initial heading between points)
- Local planar projection (distance + bearing from a center to scene x/z in feet)

All calculations use a spherical Earth with the WGS84 equatorial radius
(R = 6,378,137 m).
"""

from math import atan2, cos, degrees, radians, sin, sqrt

from gridscaper.constants import UnitConfig

EARTH_RADIUS_M = UnitConfig.EARTH_RADIUS_M


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    Coordinates are in decimal degrees (WGS84).
    Bearings are in degrees clockwise from North (0-360).
    Distances are in meters unless the method name says otherwise.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lng1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lng2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters.
        """
        dlat = radians(lat2 - lat1)
        dlng = radians(lng2 - lng1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlng / 2) ** 2
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def haversine_distance_ft(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Great-circle distance in feet (scene units before scaling)."""
        return GeoCalculator.haversine_distance_m(lat1=lat1, lng1=lng1, lat2=lat2, lng2=lng2) * UnitConfig.FEET_PER_METER

    @staticmethod
    def initial_bearing_deg(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Calculate initial bearing from point 1 to point 2.

        Args:
            lat1: Latitude of start point (decimal degrees)
            lng1: Longitude of start point (decimal degrees)
            lat2: Latitude of end point (decimal degrees)
            lng2: Longitude of end point (decimal degrees)

        Returns:
            Bearing in degrees (0-360, clockwise from North).
        """
        lat1_rad, lat2_rad = radians(lat1), radians(lat2)
        dlng = radians(lng2 - lng1)
        y = sin(dlng) * cos(lat2_rad)
        x = cos(lat1_rad) * sin(lat2_rad) - sin(lat1_rad) * cos(lat2_rad) * cos(dlng)
        return (degrees(atan2(y, x)) + 360) % 360

    @staticmethod
    def local_offset_ft(
        center_lat: float,
        center_lng: float,
        lat: float,
        lng: float,
    ) -> tuple[float, float]:
        """Project a point onto the local plane around a center point.

        The great-circle distance from the center is split along the initial
        bearing: east-west component on x, north-south component on z.

        Args:
            center_lat: Latitude of the projection center
            center_lng: Longitude of the projection center
            lat: Latitude of the point to project
            lng: Longitude of the point to project

        Returns:
            Tuple (x, z) in feet. East is +x, north is +z.
        """
        distance_ft = GeoCalculator.haversine_distance_ft(lat1=center_lat, lng1=center_lng, lat2=lat, lng2=lng)
        if distance_ft == 0.0:
            return 0.0, 0.0
        bearing = radians(
            GeoCalculator.initial_bearing_deg(lat1=center_lat, lng1=center_lng, lat2=lat, lng2=lng)
        )
        return distance_ft * sin(bearing), distance_ft * cos(bearing)

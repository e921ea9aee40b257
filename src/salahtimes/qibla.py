"""Qibla bearing — initial great-circle course toward the Kaaba."""

import math

from salahtimes.errors import UndefinedBearing
from salahtimes.models import GeoCoordinate, validate_coordinate

KAABA = GeoCoordinate(latitude=21.4225, longitude=39.8262)

_COMPASS_POINTS: tuple[str, ...] = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def qibla_bearing(coord: GeoCoordinate) -> float:
    """Bearing from ``coord`` to the Kaaba, clockwise from true north.

    Args:
        coord: Observer position.

    Returns:
        Bearing in degrees, in [0, 360).

    Raises:
        InvalidCoordinate: If the coordinate is out of range.
        UndefinedBearing: If the observer stands on the reference point.
    """
    validate_coordinate(coord)
    if coord.latitude == KAABA.latitude and coord.longitude == KAABA.longitude:
        raise UndefinedBearing("Qibla bearing is undefined at the Kaaba itself")

    lat = math.radians(coord.latitude)
    ref_lat = math.radians(KAABA.latitude)
    d_lng = math.radians(KAABA.longitude - coord.longitude)

    y = math.sin(d_lng) * math.cos(ref_lat)
    x = math.cos(lat) * math.sin(ref_lat) - math.sin(lat) * math.cos(ref_lat) * math.cos(
        d_lng
    )
    bearing = math.degrees(math.atan2(y, x)) % 360.0
    # Tiny negative angles round up to exactly 360.0
    return 0.0 if bearing >= 360.0 else bearing


def compass_point(bearing_deg: float) -> str:
    """16-point compass label for a bearing ("N", "NNE", ... "NNW")."""
    index = int((bearing_deg % 360.0) / 22.5 + 0.5) % 16
    return _COMPASS_POINTS[index]

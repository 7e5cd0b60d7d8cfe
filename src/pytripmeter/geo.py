"""Geodesy helpers: great-circle distance and Web-Mercator map units."""

from __future__ import annotations

import math

from pytripmeter._constants import EARTH_RADIUS_M, MAP_WORLD_SIZE, MERCATOR_MAX_LATITUDE


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in metres.

    Parameters
    ----------
    lat1, lon1 : float
        First point, in degrees.
    lat2, lon2 : float
        Second point, in degrees.

    Returns
    -------
    float
        Distance over a sphere of radius :data:`EARTH_RADIUS_M`.
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    # Rounding can push a marginally above 1 for antipodal points.
    a = min(1.0, a)
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def to_map_point(lat: float, lon: float) -> tuple[float, float]:
    """Project a coordinate onto the Web-Mercator plane in map units.

    The plane is :data:`MAP_WORLD_SIZE` units wide and tall with the
    origin at the north-west corner; ``y`` grows southwards.
    """
    lat = max(-MERCATOR_MAX_LATITUDE, min(MERCATOR_MAX_LATITUDE, lat))
    x = (lon + 180.0) / 360.0 * MAP_WORLD_SIZE
    y = (1.0 - math.asinh(math.tan(math.radians(lat))) / math.pi) / 2.0 * MAP_WORLD_SIZE
    return x, y


def from_map_point(x: float, y: float) -> tuple[float, float]:
    """Inverse of :func:`to_map_point`; returns ``(lat, lon)``."""
    lon = x / MAP_WORLD_SIZE * 360.0 - 180.0
    lat = math.degrees(math.atan(math.sinh(math.pi * (1.0 - 2.0 * y / MAP_WORLD_SIZE))))
    return lat, lon

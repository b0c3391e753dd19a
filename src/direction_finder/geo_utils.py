# geo_utils.py
# Pure geographic helper functions.
# Depends only on: angle_math, models.

import math

from .angle_math import normalize
from .models import Coord


EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Coord, b: Coord) -> float:
    """
    Great-circle distance between two points in kilometres.

    Uses the atan2 form of the Haversine formula, which stays stable for
    nearly antipodal points. Out-of-range coordinates give a meaningless
    but finite result.

    Args:
        a: Origin.
        b: Destination.

    Returns:
        Distance in kilometres (0 for identical points).
    """
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat))
        * math.cos(math.radians(b.lat))
        * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push h just outside [0, 1]
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def true_bearing(origin: Coord, target: Coord) -> float:
    """
    Bearing from origin toward target on a flat lat/lon plane.

    Axis convention: 0 points along increasing longitude and 90 along
    increasing latitude. With real-world coordinates 0 is therefore
    geographic east, not north.

    Known limitation: this is atan2(d_lat, d_lon) on raw degrees, not a
    geodesic azimuth. It is only usable over short, regional distances and
    degrades near the poles. The predictor depends on these exact values,
    so do not swap in initial_bearing() here.

    Args:
        origin: Observer position.
        target: Point being looked at.

    Returns:
        Bearing in degrees [0, 360).
    """
    d_lat = target.lat - origin.lat
    d_lon = target.lon - origin.lon
    return normalize(math.degrees(math.atan2(d_lat, d_lon)))


def initial_bearing(origin: Coord, target: Coord) -> float:
    """
    Geodesic forward azimuth from origin to target in degrees [0, 360).

    Diagnostic only; prediction uses true_bearing().
    """
    rlat1, rlon1 = math.radians(origin.lat), math.radians(origin.lon)
    rlat2, rlon2 = math.radians(target.lat), math.radians(target.lon)
    d_lon = rlon2 - rlon1
    y = math.sin(d_lon) * math.cos(rlat2)
    x = math.cos(rlat1) * math.sin(rlat2) - math.sin(rlat1) * math.cos(rlat2) * math.cos(d_lon)
    return normalize(math.degrees(math.atan2(y, x)))

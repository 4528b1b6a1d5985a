# src/xiny/spatial/distance.py

from __future__ import annotations

import math

# Spherical Earth radius used for chain step distances.
EARTH_RADIUS_M = 6_371_000.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Compute the great-circle distance between two WGS84 points (lat, lon)
    in decimal degrees, using the Haversine formula.

    Returns distance in meters.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2 - lon1)

    a = (
        math.sin(dphi / 2.0) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    )
    # rounding can push `a` a hair above 1 for antipodal points
    a = min(1.0, a)
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def step_distance_m(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> int:
    """Whole-meter distance of one chain step."""
    return int(round(haversine_m(lat1, lon1, lat2, lon2)))

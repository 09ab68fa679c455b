"""Great-circle distance and geofence membership.

Spherical Earth, double precision, no antimeridian or polar handling. All
current deployments are far from both, so this is an accepted approximation.
"""
from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_M
from .model import Coordinate, PerimeterPolicy


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two points, in meters.

    Inputs are not range-checked.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    h = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1) * math.cos(lat2) *
         math.sin(delta_lon / 2) ** 2)
    # Rounding can push h a hair outside [0, 1].
    h = min(max(h, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_M * c


def is_within_perimeter(point: Coordinate, policy: PerimeterPolicy) -> bool:
    """Inclusive boundary: a point exactly on the radius is inside."""
    return distance_meters(point, policy.center) <= policy.radius_meters

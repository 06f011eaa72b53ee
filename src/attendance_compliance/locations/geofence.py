"""Geofence check: is a point within the office radius."""

from __future__ import annotations

import math
from typing import Optional

from ..core.constants import EARTH_RADIUS_METERS
from ..core.exceptions import InvalidInput
from .model import Coordinates, OfficeLocation


def haversine_distance(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance in meters on a sphere of Earth's mean radius."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def is_within_radius(point: Optional[Coordinates], office: OfficeLocation) -> bool:
    """True iff point lies within office.radius_meters (boundary counts as inside).

    Missing coordinates are an input error, not an outside-radius result.
    """
    if point is None:
        raise InvalidInput("coordinates are required for a location check")
    return haversine_distance(point, office.coordinates) <= office.radius_meters

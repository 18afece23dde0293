"""Distance and travel-time helpers."""

from __future__ import annotations

from math import asin, cos, radians, sin, sqrt

from nongkrongr.core.utils import round_half_up

EARTH_RADIUS_KM = 6371.0
# urban road networks are roughly 1.4x the straight line
ROAD_FACTOR = 1.4
AVERAGE_SPEED_KMH = 30


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine straight-line distance in kilometres."""
    rlat1, rlon1 = radians(lat1), radians(lon1)
    rlat2, rlon2 = radians(lat2), radians(lon2)
    dlat = rlat2 - rlat1
    dlon = rlon2 - rlon1
    a = sin(dlat / 2) ** 2 + cos(rlat1) * cos(rlat2) * sin(dlon / 2) ** 2
    return EARTH_RADIUS_KM * 2 * asin(sqrt(a))


def road_distance(km: float) -> float:
    return round_half_up(km * ROAD_FACTOR, 1)


def road_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    return road_distance(distance_km(lat1, lon1, lat2, lon2))


def estimate_minutes(km: float) -> int:
    return int(round_half_up(km / AVERAGE_SPEED_KMH * 60))


def format_duration(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} mnt"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours} jam"
    return f"{hours} jam {mins} mnt"

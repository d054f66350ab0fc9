"""
Small spherical and flat-plane helpers. Nothing here is navigation grade; the simulation only needs numbers that look
right on a world map.
"""

import math

from flightsim.model.position import Position


EARTH_RADIUS_KM = 6371.0


def interpolate(a: float, b: float, fraction: float) -> float:
    return a + (b - a) * fraction


def distance_km(a: Position, b: Position) -> float:
    """
    Great-circle distance between two positions in kilometers (haversine formula).
    """
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude)) * math.cos(math.radians(b.latitude)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def flat_heading(a: Position, b: Position) -> float:
    """
    Compass heading in degrees [0, 360) from `a` to `b`, treating latitude and longitude as plane coordinates. This is
    the heading the simulation's flat-plane integrator needs to carry a flight from `a` toward `b`.
    """
    heading = math.degrees(math.atan2(b.longitude - a.longitude, b.latitude - a.latitude))
    if heading < 0:
        heading += 360
    return heading


def normalize_longitude(longitude: float) -> float:
    """
    Wrap a longitude into (-180, 180].
    """
    while longitude > 180:
        longitude -= 360
    while longitude <= -180:
        longitude += 360
    return longitude

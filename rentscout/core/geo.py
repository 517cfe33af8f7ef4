from __future__ import annotations

from math import cos, degrees, radians

from rentscout.core.models import BoundingBox


EARTH_RADIUS_METERS = 6_371_000.0


def calculate_bounding_box(center_lat: float, center_lon: float, radius_meters: float) -> BoundingBox:
    """
    Rectangle enclosing a circle of radius_meters around the center point.

    Longitude bounds that cross the antimeridian are wrapped once by 360 degrees;
    radii wide enough to need more than one wrap are not handled. A radius of zero
    or less raises ValueError.
    """
    if radius_meters <= 0:
        raise ValueError("radius_meters must be positive.")

    lat_delta = degrees(radius_meters / EARTH_RADIUS_METERS)
    min_lat = center_lat - lat_delta
    max_lat = center_lat + lat_delta

    cos_lat = cos(radians(center_lat))
    if cos_lat == 0:
        return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lon=-180.0, max_lon=180.0)

    lon_delta = lat_delta / cos_lat
    min_lon = center_lon - lon_delta
    max_lon = center_lon + lon_delta
    if min_lon < -180:
        min_lon += 360
    if max_lon > 180:
        max_lon -= 360
    return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lon=min_lon, max_lon=max_lon)

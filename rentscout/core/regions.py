from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rentscout.core.geo import calculate_bounding_box
from rentscout.core.models import RegionQuery


DEFAULT_RADIUS_METERS = 2000.0
UNKNOWN_LOCATION = "Unknown Location"


@dataclass(slots=True, frozen=True)
class PointOfInterest:
    name: str
    lat: float
    lon: float
    radius_meters: float | None = None


POINTS_OF_INTEREST: tuple[PointOfInterest, ...] = (
    PointOfInterest("OTPP", 43.6449636, -79.3846864, 1500),
    PointOfInterest("Yonge&Bloor", 43.6702466, -79.3867799, 1500),
    PointOfInterest("Bay&Wellesley", 43.6643907, -79.3871406, 1500),
)

# Residential lease search: 2+ bed, 1+ bath, 700-1300 sqft, $2000-4000/month, newest first.
BASE_SEARCH_PARAMS: dict[str, Any] = {
    "ZoomLevel": 10,
    "CurrentPage": 1,
    "Sort": "6-D",
    "PropertyTypeGroupID": 1,
    "TransactionTypeId": 3,
    "PropertySearchTypeId": 1,
    "RentMin": 2000,
    "RentMax": 4000,
    "BedRange": "2-0",
    "BathRange": "1-0",
    "SQFTRange": "699-1299",
    "Keywords": "Pets Allowed,Garage,Carpet Free",
    "Currency": "CAD",
    "IncludeHiddenListings": False,
    "RecordsPerPage": 25,
    "ApplicationId": 1,
    "CultureId": 1,
    "Version": "7.0",
}


def build_region_queries(
    points: tuple[PointOfInterest, ...] = POINTS_OF_INTEREST,
    base_params: dict[str, Any] | None = None,
) -> list[RegionQuery]:
    params = dict(BASE_SEARCH_PARAMS if base_params is None else base_params)
    queries: list[RegionQuery] = []
    for point in points:
        radius = point.radius_meters or DEFAULT_RADIUS_METERS
        queries.append(
            RegionQuery(
                name=point.name,
                center_lat=point.lat,
                center_lon=point.lon,
                radius_meters=radius,
                bbox=calculate_bounding_box(point.lat, point.lon, radius),
                base_params=dict(params),
            )
        )
    return queries


def location_label(config_number: int | None, points: tuple[PointOfInterest, ...] = POINTS_OF_INTEREST) -> str:
    """
    Label for the 1-based region number embedded in raw artifact names.
    """
    if config_number is None or not 1 <= config_number <= len(points):
        return UNKNOWN_LOCATION
    return points[config_number - 1].name

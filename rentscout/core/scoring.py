from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterable

from rentscout.core.heuristics import YES
from rentscout.core.models import Listing


PET_FRIENDLY_POINTS = 100
GARAGE_POINTS = 100
CARPET_FREE_POINTS = 50
AREA_POINTS = 10
AREA_POINTS_MIN_SQFT = 700
VALUE_NUMERATOR = 10_000


def price_per_area(price: float, area_sqft: float) -> float | None:
    if area_sqft <= 0:
        return None
    return round(price / area_sqft, 2)


def value_points(price: float, area_sqft: float) -> int:
    # Divides by the already-rounded price per sqft so existing rankings stay reproducible.
    if price <= 0 or area_sqft <= 0:
        return 0
    per_area = price_per_area(price, area_sqft)
    if not per_area:
        return 0
    return _round_half_up(VALUE_NUMERATOR / per_area)


def compute_priority_score(listing: Listing) -> int:
    score = 0
    if listing.pet_friendly == YES:
        score += PET_FRIENDLY_POINTS
    if listing.has_garage:
        score += GARAGE_POINTS
    if listing.carpet_free == YES:
        score += CARPET_FREE_POINTS
    if listing.area_sqft >= AREA_POINTS_MIN_SQFT:
        score += AREA_POINTS
    score += value_points(listing.price, listing.area_sqft)
    return score


def score_listings(listings: Iterable[Listing]) -> list[Listing]:
    return [replace(listing, priority_score=compute_priority_score(listing)) for listing in listings]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

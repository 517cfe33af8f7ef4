from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from rentscout.core.models import Listing
from rentscout.core.normalize import normalize_listing


DEFAULT_MIN_AREA_SQFT = 700.0


@dataclass(slots=True)
class ListingAccumulator:
    """
    Collects normalized listings across result pages, keeping the first record per MLS number.
    """

    seen_ids: set[str] = field(default_factory=set)
    listings: list[Listing] = field(default_factory=list)
    duplicates: int = 0

    def ingest(self, records: Iterable[Any], location_label: str = "") -> int:
        added = 0
        for record in records:
            if not isinstance(record, dict):
                continue
            if self.add(normalize_listing(record, location_label)):
                added += 1
        return added

    def add(self, listing: Listing) -> bool:
        if listing.identifier in self.seen_ids:
            self.duplicates += 1
            return False
        self.seen_ids.add(listing.identifier)
        self.listings.append(listing)
        return True


def passes_filters(listing: Listing, min_area_sqft: float = DEFAULT_MIN_AREA_SQFT) -> bool:
    return listing.area_sqft >= min_area_sqft and not listing.is_basement


def filter_listings(listings: Iterable[Listing], min_area_sqft: float = DEFAULT_MIN_AREA_SQFT) -> list[Listing]:
    return [listing for listing in listings if passes_filters(listing, min_area_sqft)]

from __future__ import annotations

import csv
import io
from typing import Any, Iterable

from rentscout.core.heuristics import YES
from rentscout.core.models import Listing


REPORT_COLUMNS: tuple[str, ...] = (
    "MLS Number",
    "Address",
    "Rent/Price",
    "Bedrooms",
    "Bathrooms",
    "Property Type",
    "Interior Size",
    "Area (sqft)",
    "Land Size",
    "Listed Date",
    "Time On Market",
    "Link",
    "Location",
    "Parking Spaces",
    "Pet Friendly",
    "Carpet Free",
    "Garage",
    "Price Value",
    "Price Per Sqft",
    "Priority Score",
    "Description",
)


def sort_listings(listings: Iterable[Listing]) -> list[Listing]:
    # sorted() is stable, so equal scores keep ingestion order.
    return sorted(listings, key=lambda listing: listing.priority_score, reverse=True)


def listing_to_row(listing: Listing) -> list[Any]:
    return [
        listing.identifier,
        listing.address,
        listing.price_text,
        listing.bedrooms,
        listing.bathrooms,
        listing.property_type,
        listing.size_interior,
        _format_number(listing.area_sqft),
        listing.land_size,
        listing.listed_date,
        listing.time_on_market,
        listing.link,
        listing.location_label,
        listing.parking_spaces,
        listing.pet_friendly,
        listing.carpet_free,
        "yes" if listing.has_garage else "no",
        listing.price,
        f"{listing.price_per_area:.2f}" if listing.price_per_area is not None else "N/A",
        listing.priority_score,
        listing.description,
    ]


def listings_to_csv(listings: Iterable[Listing], delimiter: str = ",") -> str:
    rows = [listing_to_row(listing) for listing in listings]
    if not rows:
        return ""
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(REPORT_COLUMNS)
    writer.writerows(rows)
    return buffer.getvalue()


def summarize_listings(all_listings: list[Listing], filtered: list[Listing]) -> dict[str, int]:
    return {
        "total": len(all_listings),
        "filtered": len(filtered),
        "pet_friendly": sum(1 for listing in filtered if listing.pet_friendly == YES),
        "garage": sum(1 for listing in filtered if listing.has_garage),
        "carpet_free": sum(1 for listing in filtered if listing.carpet_free == YES),
    }


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"

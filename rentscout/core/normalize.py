from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any

from rentscout.core.heuristics import detect_basement, detect_carpet_free, detect_garage, detect_pet_friendly
from rentscout.core.models import Listing
from rentscout.core.scoring import price_per_area


LISTING_BASE_URL = "https://www.realtor.ca"
DOTNET_EPOCH_TICKS = 621_355_968_000_000_000
TICKS_PER_MILLISECOND = 10_000
UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_RANGE_RE = re.compile(r"(\d+(?:\.\d+)?)\s*-\s*(\d+(?:\.\d+)?)")
_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")


def normalize_listing(raw_item: dict[str, Any], location_label: str = "") -> Listing:
    """
    Build a canonical Listing from one raw search record.

    Missing or malformed fields degrade to empty/zero/unknown values; this never raises
    for a dict input.
    """
    building = _as_dict(raw_item.get("Building"))
    prop = _as_dict(raw_item.get("Property"))
    address = _as_dict(prop.get("Address"))
    land = _as_dict(raw_item.get("Land"))

    address_text = _text(address.get("AddressText"))
    price_text = _text(prop.get("LeaseRent") or prop.get("Price"))
    description = _text(raw_item.get("PublicRemarks"))
    relative_url = _text(raw_item.get("RelativeURLEn"))

    area = extract_area(building.get("FloorAreaMeasurements"))
    price = extract_price(price_text)

    return Listing(
        identifier=_text(raw_item.get("MlsNumber")),
        address=address_text,
        price_text=price_text,
        price=price,
        bedrooms=_text(building.get("Bedrooms")),
        bathrooms=_text(building.get("BathroomTotal")),
        property_type=_text(building.get("Type")),
        size_interior=_text(building.get("SizeInterior")),
        area_sqft=area,
        land_size=_text(land.get("SizeTotal") or land.get("SizeFrontage")),
        listed_date=format_ticks_date(raw_item.get("InsertedDateUTC")),
        time_on_market=_text(raw_item.get("TimeOnRealtor")),
        link=f"{LISTING_BASE_URL}{relative_url}" if relative_url else "",
        location_label=location_label,
        parking_spaces=_text(prop.get("ParkingSpaceTotal")) or "0",
        has_garage=detect_garage(prop.get("Parking"), prop.get("ParkingType")),
        pet_friendly=detect_pet_friendly(description),
        carpet_free=detect_carpet_free(description),
        is_basement=detect_basement(address_text, description),
        description=description,
        price_per_area=price_per_area(price, area),
    )


def parse_area(area_text: Any) -> float:
    """
    "1000-1200 sqft" -> 1100.0, "850 sqft" -> 850.0, anything else -> 0.0.
    """
    if isinstance(area_text, (int, float)) and not isinstance(area_text, bool):
        return float(area_text) if area_text > 0 else 0.0
    if not isinstance(area_text, str):
        return 0.0
    cleaned = area_text.replace(",", "")
    range_match = _RANGE_RE.search(cleaned)
    if range_match:
        low, high = float(range_match.group(1)), float(range_match.group(2))
        return (low + high) / 2
    number_match = _NUMBER_RE.search(cleaned)
    if number_match:
        return float(number_match.group(0))
    return 0.0


def extract_area(measurements: Any) -> float:
    if not isinstance(measurements, list):
        return 0.0
    for measurement in measurements:
        if not isinstance(measurement, dict):
            continue
        candidate = measurement.get("AreaUnformatted") or measurement.get("Area")
        if not candidate:
            continue
        area = parse_area(candidate)
        if area > 0:
            return area
    return 0.0


def extract_price(price_text: Any) -> int:
    """
    "$3,000/Monthly" -> 3000. Every non-digit is dropped, including decimal points.
    """
    if price_text is None:
        return 0
    digits = re.sub(r"\D", "", str(price_text))
    return int(digits) if digits else 0


def format_ticks_date(ticks: Any) -> str:
    """
    Convert .NET DateTime ticks to a UTC YYYY-MM-DD string.

    Values that cannot be converted are returned as given.
    """
    if ticks is None or ticks == "":
        return ""
    try:
        milliseconds = (int(str(ticks).strip()) - DOTNET_EPOCH_TICKS) // TICKS_PER_MILLISECOND
        return (UNIX_EPOCH + timedelta(milliseconds=milliseconds)).strftime("%Y-%m-%d")
    except (TypeError, ValueError, OverflowError):
        return str(ticks)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()

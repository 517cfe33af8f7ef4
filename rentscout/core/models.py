from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


@dataclass(slots=True, frozen=True)
class RegionQuery:
    name: str
    center_lat: float
    center_lon: float
    radius_meters: float
    bbox: BoundingBox
    base_params: dict[str, Any] = field(default_factory=dict)

    def to_query_params(self) -> dict[str, Any]:
        return {
            "LatitudeMax": self.bbox.max_lat,
            "LongitudeMax": self.bbox.max_lon,
            "LatitudeMin": self.bbox.min_lat,
            "LongitudeMin": self.bbox.min_lon,
            **self.base_params,
        }


@dataclass(slots=True)
class SearchProfile:
    name: str
    headers: dict[str, str] = field(default_factory=dict)
    cookies: str = ""
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SearchRequestState:
    params: dict[str, Any]
    headers: dict[str, str]
    credential_token: str = ""

    @property
    def page(self) -> int:
        return int(self.params.get("CurrentPage") or 1)

    def set_page(self, page: int) -> None:
        self.params["CurrentPage"] = page


@dataclass(slots=True, frozen=True)
class ResultPage:
    records: tuple[dict[str, Any], ...] = ()
    total_records: int = 0
    page_size: int | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> ResultPage:
        if not isinstance(payload, dict):
            return cls()
        results = payload.get("Results")
        records = tuple(item for item in results if isinstance(item, dict)) if isinstance(results, list) else ()
        paging = payload.get("Paging") if isinstance(payload.get("Paging"), dict) else {}
        return cls(
            records=records,
            total_records=_safe_int(paging.get("TotalRecords")) or 0,
            page_size=_safe_int(paging.get("RecordsPerPage")),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "Paging": {"TotalRecords": self.total_records, "RecordsPerPage": self.page_size},
            "Results": list(self.records),
        }


@dataclass(slots=True)
class Listing:
    identifier: str
    address: str = ""
    price_text: str = ""
    price: int = 0
    bedrooms: str = ""
    bathrooms: str = ""
    property_type: str = ""
    size_interior: str = ""
    area_sqft: float = 0.0
    land_size: str = ""
    listed_date: str = ""
    time_on_market: str = ""
    link: str = ""
    location_label: str = ""
    parking_spaces: str = "0"
    has_garage: bool = False
    pet_friendly: str = "unknown"  # yes | no | unknown
    carpet_free: str = "unknown"  # yes | no | unknown
    is_basement: bool = False
    description: str = ""
    price_per_area: float | None = None
    priority_score: int = 0


@dataclass(slots=True)
class UnitOutcome:
    identifier: str
    region_index: int
    profile_name: str
    succeeded: bool
    page: ResultPage | None = None
    error: str | None = None
    pages_fetched: int = 0
    skipped_pages: list[int] = field(default_factory=list)
    stop_reason: str | None = None  # empty_page | redirect | rate_limited


@dataclass(slots=True)
class AggregatedRunResult:
    outcomes: list[UnitOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def failures(self) -> list[UnitOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]


def _safe_int(value: Any) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None

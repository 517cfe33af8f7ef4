from __future__ import annotations

import re
from typing import Any, Iterable


YES = "yes"
NO = "no"
UNKNOWN = "unknown"

# Keyword families matched against lower-cased listing text.
PET_FRIENDLY_PATTERNS: tuple[str, ...] = (
    r"pets?[-\s]*(?:friendly|allowed|ok|welcome)",
    r"dog[-\s]*(?:friendly|allowed|ok|welcome)",
    r"dogs[-\s]*(?:allowed|ok|welcome)",
    r"cat[-\s]*(?:friendly|allowed|ok|welcome)",
    r"cats[-\s]*(?:allowed|ok|welcome)",
)
CARPET_FREE_PATTERNS: tuple[str, ...] = (
    r"carpet[-\s]*free",
    r"no[-\s]*carpet",
    r"hardwood",
    r"laminate[-\s]*floor",
    r"tile[-\s]*floor",
)
GARAGE_PATTERNS: tuple[str, ...] = (r"garage",)
BASEMENT_PATTERNS: tuple[str, ...] = (r"basement", r"bsmt\.?")


def compile_family(patterns: Iterable[str]) -> re.Pattern[str]:
    return re.compile("|".join(f"(?:{pattern})" for pattern in patterns), re.IGNORECASE)


PET_FRIENDLY_RE = compile_family(PET_FRIENDLY_PATTERNS)
CARPET_FREE_RE = compile_family(CARPET_FREE_PATTERNS)
GARAGE_RE = compile_family(GARAGE_PATTERNS)
BASEMENT_RE = compile_family(BASEMENT_PATTERNS)


def classify_text(text: Any, pattern: re.Pattern[str]) -> str:
    """
    Three-valued match: unknown when there is no text to inspect.
    """
    if not isinstance(text, str) or not text:
        return UNKNOWN
    return YES if pattern.search(text.lower()) else NO


def detect_pet_friendly(text: Any) -> str:
    return classify_text(text, PET_FRIENDLY_RE)


def detect_carpet_free(text: Any) -> str:
    return classify_text(text, CARPET_FREE_RE)


def detect_garage(parking_entries: Any, parking_type: Any) -> bool:
    if isinstance(parking_entries, list):
        for entry in parking_entries:
            name = entry.get("Name") if isinstance(entry, dict) else None
            if isinstance(name, str) and GARAGE_RE.search(name):
                return True
    return isinstance(parking_type, str) and GARAGE_RE.search(parking_type) is not None


def detect_basement(address: Any, description: Any) -> bool:
    blob = " ".join(value for value in (address, description) if isinstance(value, str))
    return BASEMENT_RE.search(blob.lower()) is not None

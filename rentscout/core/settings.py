from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True)
class SearchSettings:
    curls_dir: Path
    output_dir: Path
    analyzed_dir: Path
    save_to_file: bool = True
    verbose: bool = True
    min_delay_ms: int = 2000
    max_delay_ms: int = 5000
    fetch_multiple_pages: bool = False
    fetch_all_pages: bool = False
    max_pages: int = 0  # 0 = every page
    min_area_sqft: float = 700.0

    @property
    def min_delay_seconds(self) -> float:
        return self.min_delay_ms / 1000.0

    @property
    def max_delay_seconds(self) -> float:
        return self.max_delay_ms / 1000.0


def load_search_settings() -> SearchSettings:
    """
    Settings from RENTSCOUT_* environment variables; CLI flags are applied on top by the jobs.
    """
    min_delay = max(0, _env_int("RENTSCOUT_MIN_DELAY_MS", 2000))
    max_delay = max(min_delay, _env_int("RENTSCOUT_MAX_DELAY_MS", 5000))
    return SearchSettings(
        curls_dir=Path(os.environ.get("RENTSCOUT_CURLS_DIR") or "curls"),
        output_dir=Path(os.environ.get("RENTSCOUT_OUTPUT_DIR") or "output"),
        analyzed_dir=Path(os.environ.get("RENTSCOUT_ANALYZED_DIR") or "analyzed"),
        save_to_file=_env_bool("RENTSCOUT_SAVE", True),
        verbose=_env_bool("RENTSCOUT_VERBOSE", True),
        min_delay_ms=min_delay,
        max_delay_ms=max_delay,
        fetch_multiple_pages=_env_bool("RENTSCOUT_FETCH_MULTIPLE_PAGES", False),
        fetch_all_pages=_env_bool("RENTSCOUT_FETCH_ALL_PAGES", False),
        max_pages=max(0, _env_int("RENTSCOUT_MAX_PAGES", 0)),
        min_area_sqft=float(_env_int("RENTSCOUT_MIN_AREA_SQFT", 700)),
    )


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except (TypeError, ValueError):
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes"}

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl

from rentscout.core.errors import ConfigError
from rentscout.core.models import SearchProfile

LOGGER = logging.getLogger(__name__)

_COOKIE_RE = re.compile(r"(?:-b|--cookie)\s+'([^']+)'")
_HEADER_RE = re.compile(r"(?:-H|--header)\s+'([^:']+):\s*([^']*)'")
_DATA_RE = re.compile(r"--data(?:-raw|-urlencode|-binary)?\s+'([^']+)'")
_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def parse_curl_text(curl_text: str, name: str = "") -> SearchProfile:
    """
    Extract headers, cookies and form parameters from a browser "copy as cURL" capture.

    A cookie sent as a header is treated the same as one passed with -b.
    """
    headers: dict[str, str] = {}
    for match in _HEADER_RE.finditer(curl_text):
        headers[match.group(1).strip().lower()] = match.group(2).strip()

    cookie_match = _COOKIE_RE.search(curl_text)
    cookies = cookie_match.group(1) if cookie_match else headers.pop("cookie", "")
    headers.pop("cookie", None)

    params: dict[str, Any] = {}
    data_match = _DATA_RE.search(curl_text)
    if data_match:
        for key, value in parse_qsl(data_match.group(1), keep_blank_values=True):
            params[key] = _coerce_value(value)

    LOGGER.debug("Parsed curl profile=%s headers=%s params=%s", name, sorted(headers), len(params))
    return SearchProfile(name=name, headers=headers, cookies=cookies, params=params)


def load_profile(path: Path) -> SearchProfile:
    if not path.is_file():
        raise ConfigError(f"Curl profile not found: {path}")
    return parse_curl_text(path.read_text(encoding="utf-8"), name=path.stem)


def load_profiles(curls_dir: Path, number: int | None = None) -> list[SearchProfile]:
    """
    Profile <number>.txt when a number is given, otherwise every *.txt ordered numerically.
    """
    if number is not None:
        return [load_profile(curls_dir / f"{number}.txt")]
    if not curls_dir.is_dir():
        raise ConfigError(f"Curl profile directory not found: {curls_dir}")
    paths = sorted(curls_dir.glob("*.txt"), key=_profile_sort_key)
    if not paths:
        raise ConfigError(f"No curl profiles (*.txt) in {curls_dir}")
    return [load_profile(path) for path in paths]


def _profile_sort_key(path: Path) -> tuple[int, int, str]:
    if path.stem.isdigit():
        return (0, int(path.stem), path.stem)
    return (1, 0, path.stem)


def _coerce_value(value: str) -> Any:
    if value == "true":
        return True
    if value == "false":
        return False
    if _NUMBER_RE.fullmatch(value):
        return float(value) if "." in value else int(value)
    return value

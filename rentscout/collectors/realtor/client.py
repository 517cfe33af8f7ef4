from __future__ import annotations

import logging
from typing import Any

import httpx

from rentscout.collectors.base import SearchClient
from rentscout.core.errors import NetworkError, RateLimitError, RedirectError, RequestError
from rentscout.core.models import ResultPage

LOGGER = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api2.realtor.ca/Listing.svc/PropertySearch_Post"
DEFAULT_HEADERS = {
    "accept": "*/*",
    "accept-language": "en-CA,en-GB;q=0.9,en-US;q=0.8,en;q=0.7",
    "content-type": "application/x-www-form-urlencoded; charset=UTF-8",
    "origin": "https://www.realtor.ca",
    "referer": "https://www.realtor.ca/",
    "sec-fetch-dest": "empty",
    "sec-fetch-mode": "cors",
    "sec-fetch-site": "same-site",
    "user-agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/141.0.0.0 Safari/537.36"
    ),
}


class RealtorSearchClient(SearchClient):
    source_name = "realtor"

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout_seconds: float = 30.0,
        max_redirects: int = 5,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self.max_redirects = max_redirects
        self.transport = transport

    def execute(
        self,
        query_params: dict[str, Any],
        headers: dict[str, str],
        credential_token: str = "",
    ) -> ResultPage:
        request_headers = {**DEFAULT_HEADERS, **{key.lower(): value for key, value in headers.items()}}
        # httpx sets these from the actual request.
        for key in ("content-length", "host", "accept-encoding"):
            request_headers.pop(key, None)
        if credential_token:
            request_headers["cookie"] = credential_token

        try:
            with httpx.Client(
                timeout=self.timeout_seconds,
                follow_redirects=True,
                max_redirects=self.max_redirects,
                transport=self.transport,
            ) as client:
                response = client.post(self.api_url, data=_form_data(query_params), headers=request_headers)
        except httpx.TooManyRedirects as exc:
            raise RedirectError(f"Exceeded maximum redirects ({self.max_redirects}): {exc}") from exc
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Search request timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"Search request failed: {exc}") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Search response could not be read: {exc}") from exc

        if response.status_code == 429:
            raise RateLimitError("Rate limited by search endpoint (HTTP 429).")
        if not 200 <= response.status_code < 300:
            LOGGER.debug("Search response status=%s body=%s", response.status_code, response.text[:500])
            raise RequestError(
                f"Search request failed with status {response.status_code}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise RequestError(
                f"Search response was not valid JSON: {exc}",
                status_code=response.status_code,
            ) from exc
        return ResultPage.from_payload(payload)


def _form_data(query_params: dict[str, Any]) -> dict[str, str]:
    data: dict[str, str] = {}
    for key, value in query_params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            data[key] = "true" if value else "false"
        else:
            data[key] = str(value)
    return data

from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when required configuration or input files are missing."""


class SearchError(RuntimeError):
    """Base class for failures of a single remote search call."""


class NetworkError(SearchError):
    pass


class RedirectError(SearchError):
    pass


class RateLimitError(SearchError):
    pass


class RequestError(SearchError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from rentscout.core.models import ResultPage


class SearchClient(ABC):
    source_name: str  # logged at the start of each search run

    @abstractmethod
    def execute(
        self,
        query_params: dict[str, Any],
        headers: dict[str, str],
        credential_token: str = "",
    ) -> ResultPage:
        """Run one search request and return its result page.

        Raises a SearchError subclass on any failure.
        """

from __future__ import annotations

import argparse
import json
import logging
import math
import random
import re
import time
from typing import Any, Callable

from rentscout.collectors.base import SearchClient
from rentscout.collectors.realtor.client import RealtorSearchClient
from rentscout.core.errors import ConfigError, RateLimitError, RedirectError, RequestError
from rentscout.core.models import (
    AggregatedRunResult,
    RegionQuery,
    ResultPage,
    SearchProfile,
    SearchRequestState,
    UnitOutcome,
)
from rentscout.core.profiles import load_profiles
from rentscout.core.regions import build_region_queries
from rentscout.core.settings import SearchSettings, load_search_settings
from rentscout.core.storage import JsonRecordStore


LOGGER = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12
STOP_REDIRECT = "redirect"
STOP_RATE_LIMITED = "rate_limited"
STOP_EMPTY_PAGE = "empty_page"


def classify_page_error(exc: Exception) -> str | None:
    """
    Stop reason for a mid-pagination error, or None when the page should just be skipped.
    """
    if isinstance(exc, RateLimitError):
        return STOP_RATE_LIMITED
    if isinstance(exc, RequestError) and exc.status_code == 429:
        return STOP_RATE_LIMITED
    if isinstance(exc, RedirectError) or "redirect" in str(exc).lower():
        return STOP_REDIRECT
    return None


class SearchOrchestrator:
    """
    Runs every (profile, region) search unit strictly one after another.

    Requests are paced by a random delay between pages and between units. One
    failing unit never aborts the run.
    """

    def __init__(
        self,
        client: SearchClient,
        settings: SearchSettings,
        store: JsonRecordStore | None = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.client = client
        self.settings = settings
        self.store = store
        self.sleep = sleep
        self.rng = rng or random.Random()

    def run(self, regions: list[RegionQuery], profiles: list[SearchProfile]) -> AggregatedRunResult:
        result = AggregatedRunResult()
        LOGGER.info("Search run via %s client.", self.client.source_name)
        units = [(profile, index, region) for profile in profiles for index, region in enumerate(regions, start=1)]
        for position, (profile, index, region) in enumerate(units, start=1):
            identifier = f"{profile.name}_config{index}"
            LOGGER.info("Unit %s/%s: %s (%s)", position, len(units), identifier, region.name)
            outcome = self.run_unit(region, profile, index)
            result.outcomes.append(outcome)
            if outcome.succeeded:
                LOGGER.info("Unit %s succeeded with %s records.", identifier, len(outcome.page.records))
            else:
                LOGGER.error("Unit %s failed: %s", identifier, outcome.error)
            if position < len(units):
                self._pause("next unit")
        log_run_summary(result)
        return result

    def run_unit(self, region: RegionQuery, profile: SearchProfile, region_index: int) -> UnitOutcome:
        identifier = f"{profile.name}_config{region_index}"
        state = SearchRequestState(
            params={**profile.params, **region.to_query_params()},
            headers=dict(profile.headers),
            credential_token=profile.cookies,
        )
        state.set_page(1)
        if self.settings.verbose:
            LOGGER.debug("Search params for %s: %s", identifier, json.dumps(state.params, default=str))

        try:
            outcome = self._fetch_pages(state, identifier, region_index, profile.name)
            if self.store is not None and self.settings.save_to_file:
                path = self.store.save_page(outcome.page, identifier)
                LOGGER.info("Saved %s records to %s", len(outcome.page.records), path)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Search unit %s failed: %s", identifier, exc)
            return UnitOutcome(
                identifier=identifier,
                region_index=region_index,
                profile_name=profile.name,
                succeeded=False,
                error=str(exc),
            )
        return outcome

    def _fetch_pages(
        self,
        state: SearchRequestState,
        identifier: str,
        region_index: int,
        profile_name: str,
    ) -> UnitOutcome:
        first = self.client.execute(dict(state.params), state.headers, state.credential_token)
        records: list[dict[str, Any]] = list(first.records)
        outcome = UnitOutcome(
            identifier=identifier,
            region_index=region_index,
            profile_name=profile_name,
            succeeded=True,
            pages_fetched=1,
        )
        LOGGER.info("First page: total_records=%s page_records=%s", first.total_records, len(first.records))

        pages_to_fetch = self._pages_to_fetch(first)
        for page in range(2, pages_to_fetch + 1):
            self._pause(f"page {page}")
            state.set_page(page)
            try:
                page_result = self.client.execute(dict(state.params), state.headers, state.credential_token)
            except Exception as exc:  # noqa: BLE001
                stop_reason = classify_page_error(exc)
                if stop_reason is not None:
                    LOGGER.warning("Page %s of %s stopped paging (%s): %s", page, identifier, stop_reason, exc)
                    outcome.stop_reason = stop_reason
                    break
                LOGGER.warning("Skipping page %s of %s: %s", page, identifier, exc)
                outcome.skipped_pages.append(page)
                continue

            if not page_result.records:
                LOGGER.info("Page %s of %s returned no records; assuming last page.", page, identifier)
                outcome.stop_reason = STOP_EMPTY_PAGE
                break
            records.extend(page_result.records)
            outcome.pages_fetched += 1
            LOGGER.info("Page %s of %s done (%s records).", state.page, identifier, len(page_result.records))

        outcome.page = ResultPage(records=tuple(records), total_records=first.total_records, page_size=first.page_size)
        return outcome

    def _pages_to_fetch(self, first: ResultPage) -> int:
        multi_page = self.settings.fetch_multiple_pages or self.settings.fetch_all_pages
        if not multi_page or first.total_records <= len(first.records):
            return 1
        page_size = first.page_size if first.page_size and first.page_size > 0 else DEFAULT_PAGE_SIZE
        total_pages = math.ceil(first.total_records / page_size)
        if self.settings.fetch_all_pages or self.settings.max_pages == 0:
            return total_pages
        return min(self.settings.max_pages, total_pages)

    def _pause(self, reason: str) -> None:
        delay = self.rng.uniform(self.settings.min_delay_seconds, self.settings.max_delay_seconds)
        LOGGER.debug("Waiting %.2fs before %s.", delay, reason)
        self.sleep(delay)


def log_run_summary(result: AggregatedRunResult) -> None:
    LOGGER.info("Run summary: units=%s succeeded=%s failed=%s", result.total, result.succeeded, result.failed)
    for failure in result.failures:
        LOGGER.info("  failed %s: %s", failure.identifier, failure.error)


def apply_cli_args(settings: SearchSettings, args: argparse.Namespace) -> SearchSettings:
    if args.pages is not None:
        settings.fetch_multiple_pages = True
        if args.pages.strip().lower() in {"all", "0"}:
            settings.fetch_all_pages = True
            settings.max_pages = 0
        else:
            match = re.match(r"\s*(\d+)", args.pages)
            settings.max_pages = max(1, int(match.group(1))) if match else 3
    if args.all_pages:
        settings.fetch_multiple_pages = True
        settings.fetch_all_pages = True
        settings.max_pages = 0
    if args.verbose:
        settings.verbose = True
    if args.quiet:
        settings.verbose = False
    if args.no_save:
        settings.save_to_file = False
    return settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run paced realtor.ca searches for every configured region.")
    parser.add_argument("-a", "--all", action="store_true", help="Run every curl profile in the curls directory (default).")
    parser.add_argument("-n", "--number", type=int, help="Run only curl profile <number>.txt.")
    parser.add_argument("-p", "--pages", help="Fetch extra pages: a page limit, or 'all' / 0 for every page.")
    parser.add_argument("--all-pages", action="store_true", help="Fetch every page.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log search parameters and delays.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Reduce output.")
    parser.add_argument("--no-save", action="store_true", help="Do not write result pages to the output directory.")
    return parser


def main(argv: list[str] | None = None, client: SearchClient | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = apply_cli_args(load_search_settings(), args)
    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    try:
        profiles = load_profiles(settings.curls_dir, None if args.all else args.number)
    except ConfigError as exc:
        LOGGER.error("Search run aborted: %s", exc)
        return 1

    orchestrator = SearchOrchestrator(
        client=client or RealtorSearchClient(),
        settings=settings,
        store=JsonRecordStore(settings.output_dir) if settings.save_to_file else None,
    )
    orchestrator.run(build_region_queries(), profiles)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from pathlib import Path

from rentscout.core.dedupe import ListingAccumulator, filter_listings
from rentscout.core.models import Listing
from rentscout.core.regions import location_label
from rentscout.core.report import listings_to_csv, sort_listings, summarize_listings
from rentscout.core.scoring import score_listings
from rentscout.core.settings import load_search_settings
from rentscout.core.storage import CsvReportSink, JsonRecordStore


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class AnalysisResult:
    all_listings: list[Listing] = field(default_factory=list)
    ranked: list[Listing] = field(default_factory=list)
    failed_artifacts: list[str] = field(default_factory=list)
    report_path: Path | None = None


def collect_listings(store: JsonRecordStore) -> tuple[ListingAccumulator, list[str]]:
    accumulator = ListingAccumulator()
    failed: list[str] = []
    artifacts = store.list_artifacts()
    LOGGER.info("Found %s raw result files in %s", len(artifacts), store.output_dir)
    for path in artifacts:
        try:
            config_number, page = store.read_artifact(path)
        except (OSError, ValueError) as exc:
            LOGGER.error("Could not read %s: %s", path.name, exc)
            failed.append(path.name)
            continue
        added = accumulator.ingest(page.records, location_label(config_number))
        LOGGER.info("Processed %s: records=%s new=%s", path.name, len(page.records), added)
    return accumulator, failed


def rank_listings(listings: list[Listing], min_area_sqft: float = 700.0) -> list[Listing]:
    return sort_listings(score_listings(filter_listings(listings, min_area_sqft)))


def run_analysis(
    store: JsonRecordStore,
    sink: CsvReportSink | None,
    min_area_sqft: float = 700.0,
    top: int = 5,
) -> AnalysisResult:
    accumulator, failed = collect_listings(store)
    result = AnalysisResult(all_listings=list(accumulator.listings), failed_artifacts=failed)
    LOGGER.info("Unique listings: %s (duplicates dropped: %s)", len(accumulator.listings), accumulator.duplicates)
    if not accumulator.listings:
        LOGGER.warning("No listings to analyze.")
        return result

    result.ranked = rank_listings(accumulator.listings, min_area_sqft)
    LOGGER.info(
        "Kept %s listings (area >= %s sqft, basement units excluded).",
        len(result.ranked),
        min_area_sqft,
    )
    if not result.ranked:
        LOGGER.warning("No listings left after filtering.")
        return result

    if sink is not None:
        result.report_path = sink.write(listings_to_csv(result.ranked))
        LOGGER.info("Report written to %s", result.report_path)

    summary = summarize_listings(result.all_listings, result.ranked)
    LOGGER.info(
        "Summary: total=%s filtered=%s pet_friendly=%s garage=%s carpet_free=%s",
        summary["total"],
        summary["filtered"],
        summary["pet_friendly"],
        summary["garage"],
        summary["carpet_free"],
    )
    for rank, listing in enumerate(result.ranked[:top], start=1):
        LOGGER.info(
            "#%s %s | MLS %s | %s | %s sqft | $%s/sqft | score=%s | %s",
            rank,
            listing.address,
            listing.identifier,
            listing.price_text,
            listing.area_sqft,
            listing.price_per_area,
            listing.priority_score,
            listing.link,
        )
    return result


def main(argv: list[str] | None = None) -> int:
    settings = load_search_settings()
    parser = argparse.ArgumentParser(description="Score and rank saved realtor.ca search results into a CSV report.")
    parser.add_argument("--output-dir", type=Path, default=settings.output_dir, help="Directory of raw JSON results.")
    parser.add_argument("--analyzed-dir", type=Path, default=settings.analyzed_dir, help="Directory for CSV reports.")
    parser.add_argument("--min-area", type=float, default=settings.min_area_sqft, help="Minimum interior sqft.")
    parser.add_argument("--top", type=int, default=5, help="Number of top listings to log.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    if not args.output_dir.is_dir():
        LOGGER.error("Raw results directory not found: %s", args.output_dir)
        return 1

    run_analysis(
        JsonRecordStore(args.output_dir),
        CsvReportSink(args.analyzed_dir),
        min_area_sqft=args.min_area,
        top=args.top,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

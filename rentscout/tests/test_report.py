import csv
import io

from rentscout.core.models import Listing
from rentscout.core.report import REPORT_COLUMNS, listings_to_csv, sort_listings, summarize_listings


def test_sort_is_descending_and_stable():
    first = Listing(identifier="first", priority_score=50)
    top = Listing(identifier="top", priority_score=500)
    second = Listing(identifier="second", priority_score=50)

    ranked = sort_listings([first, top, second])

    assert [listing.identifier for listing in ranked] == ["top", "first", "second"]


def test_csv_quotes_delimiters_quotes_and_newlines():
    listing = Listing(
        identifier="A1",
        address='12 "Main", Toronto',
        description="line one\nline two",
        area_sqft=1100.0,
        price=3000,
        price_per_area=2.73,
        has_garage=True,
        pet_friendly="yes",
        priority_score=3823,
    )

    text = listings_to_csv([listing])

    assert '"12 ""Main"", Toronto"' in text
    assert '"line one\nline two"' in text
    rows = list(csv.reader(io.StringIO(text)))
    assert rows[0] == list(REPORT_COLUMNS)
    assert len(rows[1]) == len(REPORT_COLUMNS)
    assert rows[1][0] == "A1"
    assert rows[1][1] == '12 "Main", Toronto'
    assert rows[1][7] == "1100"
    assert rows[1][16] == "yes"
    assert rows[1][18] == "2.73"
    assert rows[1][19] == "3823"


def test_csv_marks_missing_price_per_area():
    rows = list(csv.reader(io.StringIO(listings_to_csv([Listing(identifier="B2")]))))

    assert rows[1][18] == "N/A"
    assert rows[1][14] == "unknown"


def test_csv_for_empty_listing_set_is_empty():
    assert listings_to_csv([]) == ""


def test_summarize_listings_counts_amenities():
    listings = [
        Listing(identifier="a", pet_friendly="yes", has_garage=True),
        Listing(identifier="b", carpet_free="yes"),
    ]

    summary = summarize_listings(listings + [Listing(identifier="c")], listings)

    assert summary == {"total": 3, "filtered": 2, "pet_friendly": 1, "garage": 1, "carpet_free": 1}

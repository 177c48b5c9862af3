"""Tests for the byte-token activity and period parser."""

import pytest

from gifhub.contracts import ExtractionError, ParseError
from gifhub.scraper.extract import (
    extract_between,
    parse_activity_container,
    scrape_activity,
    scrape_periods,
)
from tests.helpers.fake_profile import activity_html, periods_html

pytestmark = pytest.mark.unit


class TestExtractBetween:

    def test_returns_span_between_anchors(self):
        assert extract_between(b"a[42]b", b"[", b"]") == b"42"

    def test_uses_first_left_and_next_right(self):
        assert extract_between(b"x:1,y:2,", b":", b",") == b"1"

    def test_empty_span(self):
        assert extract_between(b"[]", b"[", b"]") == b""

    def test_missing_left_anchor_names_token(self):
        with pytest.raises(ExtractionError, match="Commits:"):
            extract_between(b"Issues:3,", b"Commits:", b",")

    def test_missing_right_anchor_names_token(self):
        with pytest.raises(ExtractionError, match="}"):
            extract_between(b"Commits:3", b"Commits:", b"}")

    def test_right_anchor_before_left_is_not_used(self):
        with pytest.raises(ExtractionError):
            extract_between(b",Commits:3", b"Commits:", b",")


class TestParseActivityContainer:

    def test_reference_container(self):
        """Zero values are left out, the last label ends at the brace."""
        container = b"Commits:5,Issues:0,Pull requests:12,Code review:3}"
        assert parse_activity_container(container) == {
            "commits": 5,
            "prs": 12,
            "code_reviews": 3,
        }

    def test_last_label_found_by_document_offset(self):
        container = b"{Code review:7,Commits:80,Issues:4,Pull requests:9}"
        assert parse_activity_container(container) == {
            "code_reviews": 7,
            "commits": 80,
            "issues": 4,
            "prs": 9,
        }

    def test_all_zero_yields_empty_map(self):
        container = b"{Code review:0,Commits:0,Issues:0,Pull requests:0}"
        assert parse_activity_container(container) == {}

    def test_no_labels_names_first_label(self):
        with pytest.raises(ExtractionError, match="Commits:"):
            parse_activity_container(b"{Stars:4,Forks:2}")

    def test_missing_single_label(self):
        with pytest.raises(ExtractionError, match="Issues:"):
            parse_activity_container(b"Commits:5,Pull requests:12,Code review:3}")

    def test_non_digit_value_is_parse_error(self):
        with pytest.raises(ParseError, match="Issues:"):
            parse_activity_container(b"Commits:5,Issues:4x,Pull requests:1,Code review:3}")

    def test_negative_value_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_activity_container(b"Commits:-5,Issues:4,Pull requests:1,Code review:3}")

    def test_empty_value_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_activity_container(b"Commits:,Issues:4,Pull requests:1,Code review:3}")

    def test_value_above_100_is_parse_error(self):
        with pytest.raises(ParseError, match="out of range"):
            parse_activity_container(b"Commits:101,Issues:0,Pull requests:0,Code review:0}")

    def test_padded_value_is_parse_error(self):
        """Whitespace inside the span is never silently trimmed."""
        with pytest.raises(ParseError):
            parse_activity_container(b"Commits: 5,Issues:4,Pull requests:1,Code review:3}")


class TestScrapeActivity:

    def test_unescapes_quote_entities(self):
        html = activity_html(commits=89, issues=4, prs=7, code_reviews=0)
        assert scrape_activity(html) == {"commits": 89, "issues": 4, "prs": 7}

    def test_any_document_order(self):
        html = activity_html(commits=10, issues=20, prs=30, code_reviews=40,
                             order=["prs", "issues", "code_reviews", "commits"])
        assert scrape_activity(html) == {
            "commits": 10, "issues": 20, "prs": 30, "code_reviews": 40,
        }

    def test_missing_attribute(self):
        with pytest.raises(ExtractionError, match="data-percentages"):
            scrape_activity(b"<html><body>private profile</body></html>")


class TestScrapePeriods:

    def test_sorted_ascending(self):
        html = periods_html(["2019", "2017", "2018"])
        assert scrape_periods(html) == ["2017", "2018", "2019"]

    def test_links_without_period_id_are_skipped(self):
        html = (
            b'<ul class="filter-list small"><li>'
            b'<a id="year-link-2020" href="#">2020</a>'
            b'<a class="more" href="#">More</a>'
            b'<a id="year-link-2016" href="#">2016</a>'
            b'</ul>'
        )
        assert scrape_periods(html) == ["2016", "2020"]

    def test_empty_list(self):
        assert scrape_periods(b'<ul class="filter-list small"></ul>') == []

    def test_missing_list(self):
        with pytest.raises(ExtractionError, match="filter-list"):
            scrape_periods(b"<html></html>")

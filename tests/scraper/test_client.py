"""Tests for ProfileClient with a fake HTTP session."""

import pytest

from gifhub.contracts import ExtractionError, NetworkError
from gifhub.models import ActivityRecord
from gifhub.scraper.client import ProfileClient
from tests.helpers.fake_profile import (
    FakeSession,
    activity_html,
    connection_error,
    periods_html,
)

pytestmark = pytest.mark.unit


def test_locators(internal_config):
    client = ProfileClient(internal_config, session=FakeSession())

    assert client.profile_url("octocat") == "https://github.com/octocat"
    assert client.activity_url("octocat", "2019") == (
        "https://github.com/octocat?tab=overview&from=2019-01-01&to=2019-12-31"
    )


def test_host_override(make_config):
    config = make_config(HOST="example.test")
    client = ProfileClient(config, session=FakeSession())

    assert client.profile_url("octocat") == "https://example.test/octocat"


def test_fetch_activity_builds_record(internal_config):
    session = FakeSession({"from=2019-01-01": activity_html(commits=70, prs=20)})
    client = ProfileClient(internal_config, session=session)

    record = client.fetch_activity("octocat", "2019")

    assert record == ActivityRecord("octocat", "2019", commits=70, prs=20)


def test_sends_user_agent_and_timeout(internal_config):
    session = FakeSession({"from=2019-01-01": activity_html(commits=1)})
    client = ProfileClient(internal_config, session=session)

    client.fetch_activity("octocat", "2019")

    call = session.calls[0]
    assert call["headers"]["User-Agent"] == internal_config.fetcher.user_agent
    assert call["timeout"] == internal_config.fetcher.timeout_sec


def test_non_200_is_network_error(internal_config):
    client = ProfileClient(internal_config, session=FakeSession({"from=2019": 503}))

    with pytest.raises(NetworkError, match="503"):
        client.fetch_activity("octocat", "2019")


def test_transport_exception_is_network_error(internal_config):
    session = FakeSession({"from=2019": connection_error()})
    client = ProfileClient(internal_config, session=session)

    with pytest.raises(NetworkError, match="connection refused"):
        client.fetch_activity("octocat", "2019")


def test_malformed_page_is_extraction_error(internal_config):
    client = ProfileClient(internal_config, session=FakeSession({"from=2019": b"<html/>"}))

    with pytest.raises(ExtractionError):
        client.fetch_activity("octocat", "2019")


def test_discover_periods(internal_config):
    session = FakeSession({"https://github.com/octocat": periods_html(["2021", "2019", "2020"])})
    client = ProfileClient(internal_config, session=session)

    assert client.discover_periods("octocat") == ["2019", "2020", "2021"]

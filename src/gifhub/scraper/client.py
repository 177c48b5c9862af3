"""HTTP access to public profile pages.

Builds the per-subject, per-period locators, issues the GET requests and
runs the extraction parser on the responses.
"""

import logging
from typing import List, TYPE_CHECKING

import requests

from gifhub.contracts.failure import NetworkError
from gifhub.models import ActivityRecord
from gifhub.scraper.extract import scrape_activity, scrape_periods

if TYPE_CHECKING:
    from gifhub.schemas import InternalConfig

__all__ = ['ProfileClient']

logger = logging.getLogger(__name__)


class ProfileClient:
    """Fetches activity overviews and period lists for a subject.

    **Locators:**

    - Activity: ``{scheme}://{host}/{subject}?tab=overview&from={period}-01-01&to={period}-12-31``
    - Periods: ``{scheme}://{host}/{subject}``

    **Success:** HTTP 200 only. Any other status, and any transport
    exception raised by ``requests``, becomes a :class:`NetworkError`.

    **Thread Safety:** Holds no mutable state after construction; one client
    is shared by every fetch worker.

    Example usage::

        client = ProfileClient(config)
        record = client.fetch_activity("octocat", "2019")
        periods = client.discover_periods("octocat")
    """

    def __init__(self, config: "InternalConfig", session=None):
        """Initialize client.

        Parameters
        ----------
        config : InternalConfig
            Runtime configuration; only the ``fetcher`` section is read.
        session : object, optional
            Anything with a ``requests``-compatible ``get(url, headers=,
            timeout=)``. Defaults to the ``requests`` module. Allows
            injection for testing.
        """
        self.scheme = config.fetcher.scheme
        self.host = config.fetcher.host
        self.user_agent = config.fetcher.user_agent
        self.timeout = config.fetcher.timeout_sec
        self.session = session or requests

    def profile_url(self, subject: str) -> str:
        return f"{self.scheme}://{self.host}/{subject}"

    def activity_url(self, subject: str, period: str) -> str:
        return (
            f"{self.profile_url(subject)}"
            f"?tab=overview&from={period}-01-01&to={period}-12-31"
        )

    def html(self, url: str) -> bytes:
        """GET a URL and return its body.

        Raises
        ------
        NetworkError
            On transport failure or any status other than 200.
        """
        try:
            res = self.session.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NetworkError(f"GET {url}: {e}") from e

        if res.status_code != 200:
            raise NetworkError(f"GET status: {res.status_code} {res.reason}: {url}")

        return res.content

    def fetch_activity(self, subject: str, period: str) -> ActivityRecord:
        """Fetch and parse the activity overview of one period.

        Raises
        ------
        NetworkError, ExtractionError, ParseError
        """
        body = self.html(self.activity_url(subject, period))
        fields = scrape_activity(body)
        return ActivityRecord.from_fields(subject, period, fields)

    def discover_periods(self, subject: str) -> List[str]:
        """List every period available on the subject's profile, ascending."""
        body = self.html(self.profile_url(subject))
        periods = scrape_periods(body)
        logger.info("Discovered %d periods for %s: %s", len(periods), subject, periods)
        return periods

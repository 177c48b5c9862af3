"""Profile page access.

- extract: Byte-token parser for activity percentages and periods
- client: HTTP fetching of activity overviews and period lists
"""

from gifhub.scraper.extract import extract_between, scrape_activity, scrape_periods
from gifhub.scraper.client import ProfileClient

__all__ = [
    "extract_between",
    "scrape_activity",
    "scrape_periods",
    "ProfileClient",
]

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests
from bs4 import BeautifulSoup

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass(frozen=True)
class RequestProfile:
    """Headers and timeout used for one kind of page request."""

    name: str
    timeout: float
    headers: Dict[str, str] = field(default_factory=dict)


LISTING_PROFILE = RequestProfile(
    name="listing",
    timeout=10.0,
    headers={
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate, br",
        "DNT": "1",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    },
)

DETAIL_PROFILE = RequestProfile(
    name="detail",
    timeout=15.0,
    headers={
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Referer": "https://www.ebay.com/",
    },
)


class PageFetcher:
    """Plain HTTP transport backed by a ``requests.Session``.

    Fetch failures never propagate: timeouts, connection errors and non-2xx
    responses are logged and reported as ``None`` so callers can treat them
    the same way as a page without results.
    """

    name = "http"

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session if session is not None else requests.Session()
        self.logger = logging.getLogger("scraper.fetcher")

    def fetch(self, url: str, profile: RequestProfile = LISTING_PROFILE) -> Optional[BeautifulSoup]:
        """Fetch ``url`` and parse it, or return ``None`` on failure."""
        self.logger.info("Fetching %s page %s", profile.name, url)
        try:
            response = self.session.get(url, headers=profile.headers, timeout=profile.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            self.logger.error("Error fetching %s: %s", url, str(e))
            return None

        return BeautifulSoup(response.text, "lxml")

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

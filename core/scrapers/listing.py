import logging
import re
from typing import List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

from core.scrapers.models import DEFAULT_BASE_URL, UNKNOWN, Record
from core.scrapers.selectors import DEFAULT_SELECTORS, SelectorConfig, resolve
from core.scrapers.text import strip_boilerplate

AD_MARKER = "Shop on eBay"
MIN_TITLE_LENGTH = 10

# /itm/<id> or /itm/<slug>/<id>
_ITEM_PATH = re.compile(r"/itm/(?:[^/?#]+/)?(\d+)(?:[/?#]|$)")
_TRAILING_ID = re.compile(r"/(\d+)/?$")


def canonicalize_link(link: str) -> str:
    """Reduce an item URL to ``https://<host>/itm/<id>``.

    Links that do not look like item pages keep their path but lose their
    query string and fragment, which only carry tracking parameters.
    """
    parts = urlsplit(link)
    match = _ITEM_PATH.search(parts.path)
    if match and parts.netloc:
        return f"https://{parts.netloc}/itm/{match.group(1)}"
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def extract_item_id(link: str) -> Optional[str]:
    """Return the trailing numeric path segment of ``link``, if any."""
    match = _TRAILING_ID.search(urlsplit(link).path)
    return match.group(1) if match else None


class ListingExtractor:
    """Turns a search results page into candidate records."""

    def __init__(
        self,
        selectors: SelectorConfig = DEFAULT_SELECTORS,
        base_url: str = DEFAULT_BASE_URL,
    ):
        self.selectors = selectors
        self.base_url = base_url
        self.logger = logging.getLogger("scraper.listing")

    def find_containers(self, soup: BeautifulSoup) -> list:
        """Return item containers from the first selector that matches any.

        Results of different selectors are never merged.
        """
        for css in self.selectors.containers:
            containers = soup.select(css)
            if containers:
                self.logger.debug("Matched %d containers with %s", len(containers), css)
                return containers
        return []

    def extract(self, soup: Optional[BeautifulSoup]) -> List[Record]:
        """Extract valid records from a listing page, in page order."""
        if soup is None:
            return []

        containers = self.find_containers(soup)
        records = []
        seen_links = set()

        for element in containers:
            try:
                record = self.extract_record(element)
            except Exception as e:  # pylint: disable=broad-exception-caught
                self.logger.warning("Skipping malformed listing: %s", str(e))
                continue

            if record is None or record.link in seen_links:
                continue
            seen_links.add(record.link)
            records.append(record)

        self.logger.info("Extracted %d of %d listings", len(records), len(containers))
        return records

    def extract_record(self, element) -> Optional[Record]:
        """Build a record from one container, or ``None`` if it is unusable."""
        title = strip_boilerplate(resolve(element, self.selectors.title, default=""))
        if len(title) < MIN_TITLE_LENGTH or AD_MARKER in title:
            return None

        raw_link = resolve(element, self.selectors.link, default="")
        if not raw_link:
            return None
        link = canonicalize_link(urljoin(self.base_url, raw_link))

        identifier = extract_item_id(link)
        if identifier is None:
            return None

        image = resolve(element, self.selectors.image)
        if image != UNKNOWN:
            image = urljoin(self.base_url, image)

        return Record(
            identifier=identifier,
            name=title,
            price=resolve(element, self.selectors.price),
            link=link,
            image=image,
        )

# This file defines the abstract base class for all scrapers in the system
# It establishes the interface the API and CLI rely on

import abc
from typing import List

from core.scrapers.models import Record


class ScraperConfigError(ValueError):
    """Raised when a scraper is configured with unsupported options."""


class BaseScraper(abc.ABC):
    """Base class for marketplace scrapers.

    Concrete scrapers search a marketplace for a keyword and return the
    matching listings as :class:`Record` objects. The API and CLI only talk
    to this interface, so another marketplace can be added without touching
    either of them.
    """

    def __init__(self, name: str, url: str):
        """Initialize the scraper with a name and URL.

        Args:
            name: Unique identifier for this data source (e.g. "ebay")
            url: Base URL of the marketplace, used to build search and
                 item URLs
        """
        self.name = name
        self.url = url

    @abc.abstractmethod
    def scrape(self) -> List[Record]:
        """Scrape the marketplace and return the listings found.

        Returns:
            Records in the order they appeared on the marketplace. Every
            record has a non-empty name and link.

        Raises:
            Exceptions raised while acquiring the transport propagate to
            the caller. Failures of individual pages or listings do not.
        """
        raise NotImplementedError("Concrete scraper classes must implement scrape() method")

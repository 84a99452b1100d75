from typing import Callable, Dict

from core.scrapers.base import ScraperConfigError
from core.scrapers.browser_fetcher import BrowserFetcher
from core.scrapers.fetcher import PageFetcher


class TransportFactory:
    """Factory for the page transports a scraper can run on.

    Both transports share the fetch contract and are context managers, so
    the pipeline does not need to know which one it is using.
    """

    # Map of transport names to transport classes
    TRANSPORTS: Dict[str, Callable] = {
        "http": PageFetcher,
        "browser": BrowserFetcher,
    }

    @classmethod
    def available(cls):
        return sorted(cls.TRANSPORTS)

    @classmethod
    def create(cls, transport: str, **kwargs):
        """Create a new, not yet entered, transport.

        Args:
            transport: Name of the transport (must be in TRANSPORTS)
            **kwargs: Passed to the transport constructor

        Raises:
            ScraperConfigError: If the transport name is unknown
        """
        if transport not in cls.TRANSPORTS:
            raise ScraperConfigError(
                f"Unknown transport '{transport}', expected one of: {', '.join(cls.available())}"
            )
        return cls.TRANSPORTS[transport](**kwargs)

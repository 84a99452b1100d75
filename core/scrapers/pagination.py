import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional
from urllib.parse import quote_plus

from core.scrapers.fetcher import LISTING_PROFILE
from core.scrapers.listing import ListingExtractor
from core.scrapers.models import PipelineConfig, Record
from core.scrapers.throttle import Deadline, Throttle

logger = logging.getLogger("scraper.pagination")


def validate_page_count(pages, max_allowed: int = 10) -> int:
    """Clamp a requested page count to ``[1, max_allowed]``.

    Values that cannot be read as an integer count as 1.
    """
    try:
        parsed = int(pages)
    except (TypeError, ValueError):
        parsed = 1

    if parsed < 1:
        return 1
    if parsed > max_allowed:
        logger.warning("Page limit exceeded, capping at %d pages", max_allowed)
        return max_allowed
    return parsed


def build_page_url(base_url: str, keyword: str, page: int) -> str:
    """Build the search results URL for ``keyword`` at ``page``."""
    return (
        f"{base_url.rstrip('/')}/sch/i.html"
        f"?_nkw={quote_plus(keyword)}&_sacat=0&_pgn={page}"
    )


@dataclass
class PaginationOutcome:
    records: List[Record] = field(default_factory=list)
    pages_scraped: int = 0


class Paginator:
    """Walks search result pages 1..N until one comes back empty."""

    def __init__(
        self,
        fetcher,
        config: PipelineConfig,
        extractor: Optional[ListingExtractor] = None,
        throttle: Optional[Throttle] = None,
        deadline: Optional[Deadline] = None,
    ):
        self.fetcher = fetcher
        self.config = config
        self.extractor = extractor or ListingExtractor(base_url=config.base_url)
        self.throttle = throttle or Throttle()
        self.deadline = deadline or Deadline(None)
        self.profile = replace(LISTING_PROFILE, timeout=config.listing_timeout)
        self.logger = logging.getLogger("scraper.pagination")

    def paginate(self, keyword: str, page_count: int) -> PaginationOutcome:
        """Scrape up to ``page_count`` pages for ``keyword``.

        An empty page, whether the results ran out or the fetch failed, ends
        pagination and everything gathered so far is returned.
        """
        outcome = PaginationOutcome()
        seen_links = set()

        for page in range(1, page_count + 1):
            if self.deadline.expired:
                self.logger.warning("Run timeout reached before page %d, stopping", page)
                break

            url = build_page_url(self.config.base_url, keyword, page)
            self.logger.info("Scraping page %d of %d", page, page_count)
            records = self.extractor.extract(self.fetcher.fetch(url, self.profile))

            if not records:
                self.logger.info("No products on page %d, stopping pagination", page)
                break

            if self.config.dedupe_across_pages:
                records = [r for r in records if r.link not in seen_links]
                seen_links.update(r.link for r in records)

            outcome.records.extend(records)
            outcome.pages_scraped += 1

            if page < page_count:
                self.throttle.pause(
                    self.throttle.page_delay(
                        page,
                        self.config.page_delay_base,
                        self.config.page_delay_jitter,
                        self.config.page_delay_progressive,
                    )
                )

        self.logger.info(
            "Pagination finished: %d products from %d pages",
            len(outcome.records),
            outcome.pages_scraped,
        )
        return outcome

import logging
from typing import Callable, List, Optional

from core.scrapers.base import BaseScraper
from core.scrapers.detail import DetailEnhancer
from core.scrapers.listing import ListingExtractor
from core.scrapers.models import PipelineConfig, Record, ScrapeResult
from core.scrapers.pagination import Paginator, validate_page_count
from core.scrapers.scraper_factory import TransportFactory
from core.scrapers.selectors import DEFAULT_SELECTORS, SelectorConfig
from core.scrapers.throttle import Deadline, Throttle


class EbayScraper(BaseScraper):
    """Searches eBay for a keyword and returns enriched listings.

    A run walks the search result pages, then visits the detail page of the
    first few listings to fill in their descriptions. The transport (an HTTP
    session or a headless browser) is opened once per run and is always
    released when the run ends, whether it succeeds or fails.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        transport_factory: Optional[Callable] = None,
        selectors: SelectorConfig = DEFAULT_SELECTORS,
        throttle: Optional[Throttle] = None,
    ):
        self.config = config or PipelineConfig()
        super().__init__("ebay", self.config.base_url)
        self.transport_factory = transport_factory or (
            lambda: TransportFactory.create(self.config.transport)
        )
        self.selectors = selectors
        self.throttle = throttle or Throttle()
        self.logger = logging.getLogger("scraper.ebay")

    def run(
        self,
        keyword: Optional[str] = None,
        pages=None,
        budget: Optional[int] = None,
    ) -> ScrapeResult:
        """Run the full pipeline.

        Args:
            keyword: Search term, defaults to the configured keyword
            pages: Requested page count, clamped to ``[1, max_pages]``
            budget: Maximum number of detail pages to visit

        Returns:
            ScrapeResult with the records in page order
        """
        keyword = keyword or self.config.keyword
        page_count = validate_page_count(
            self.config.pages if pages is None else pages,
            self.config.max_pages,
        )
        self.logger.info("Starting scrape for '%s' (%d pages)", keyword, page_count)

        deadline = Deadline(self.config.run_timeout)
        with self.transport_factory() as fetcher:
            paginator = Paginator(
                fetcher,
                self.config,
                extractor=ListingExtractor(self.selectors, self.config.base_url),
                throttle=self.throttle,
                deadline=deadline,
            )
            outcome = paginator.paginate(keyword, page_count)

            enhancer = DetailEnhancer(
                fetcher,
                self.config,
                selectors=self.selectors,
                throttle=self.throttle,
                deadline=deadline,
            )
            records = enhancer.enhance_all(outcome.records, budget)

        self.logger.info("Scraping completed: %d products found", len(records))
        return ScrapeResult(
            keyword=keyword,
            pages_requested=page_count,
            pages_scraped=outcome.pages_scraped,
            records=records,
        )

    def scrape(self) -> List[Record]:
        """Scrape using the configured keyword and page count."""
        return self.run().records

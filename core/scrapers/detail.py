import logging
from dataclasses import replace
from typing import List, Optional

from bs4 import BeautifulSoup

from core.scrapers.fetcher import DETAIL_PROFILE
from core.scrapers.models import NO_DESCRIPTION, PipelineConfig, Record
from core.scrapers.selectors import DEFAULT_SELECTORS, SelectorConfig, resolve
from core.scrapers.text import normalize_description
from core.scrapers.throttle import Deadline, Throttle

DESCRIPTION_THRESHOLD = 10
FALLBACK_TEXT_LIMIT = 500
FALLBACK_MIN_LENGTH = 20


class DetailEnhancer:
    """Backfills record descriptions from their detail pages.

    Only the first ``budget`` records are visited; the rest pass through
    untouched. A record whose page cannot be fetched or parsed keeps the
    description it already had.
    """

    def __init__(
        self,
        fetcher,
        config: PipelineConfig,
        selectors: SelectorConfig = DEFAULT_SELECTORS,
        throttle: Optional[Throttle] = None,
        deadline: Optional[Deadline] = None,
    ):
        self.fetcher = fetcher
        self.config = config
        self.selectors = selectors
        self.throttle = throttle or Throttle()
        self.deadline = deadline or Deadline(None)
        self.profile = replace(DETAIL_PROFILE, timeout=config.detail_timeout)
        self.logger = logging.getLogger("scraper.detail")

    def describe(self, soup: BeautifulSoup) -> str:
        """Pull a description out of a detail page."""
        description = resolve(
            soup,
            self.selectors.description,
            threshold=DESCRIPTION_THRESHOLD,
            default="",
            clean=normalize_description,
        )
        if description:
            return description

        # First main-content container in document order
        main = soup.select_one(", ".join(self.selectors.main_content))
        if main is not None:
            text = main.get_text(" ", strip=True)[:FALLBACK_TEXT_LIMIT]
            if len(text) > FALLBACK_MIN_LENGTH:
                return normalize_description(text) or NO_DESCRIPTION

        return NO_DESCRIPTION

    def enhance_record(self, record: Record) -> Record:
        """Return ``record`` with its description filled in when possible."""
        if "/sch/" in record.link:
            self.logger.debug("Skipping search page link %s", record.link)
            return record

        try:
            soup = self.fetcher.fetch(record.link, self.profile)
            if soup is None:
                return record
            return replace(record, description=self.describe(soup))
        except Exception as e:  # pylint: disable=broad-exception-caught
            self.logger.error("Failed to scrape description from %s: %s", record.link, str(e))
            return record

    def enhance(self, records: List[Record], budget: Optional[int] = None) -> List[Record]:
        """Enhance the first ``budget`` records, keeping the rest as they are."""
        if budget is None:
            budget = self.config.detail_budget
        budget = max(budget, 0)
        head, tail = records[:budget], records[budget:]

        self.logger.info("Enhancing %d of %d products", len(head), len(records))
        enhanced = []
        for index, record in enumerate(head):
            if self.deadline.expired:
                self.logger.warning(
                    "Run timeout reached, leaving %d products unenhanced", len(head) - index
                )
                enhanced.extend(head[index:])
                break

            enhanced.append(self.enhance_record(record))

            if index < len(head) - 1:
                self.throttle.pause(
                    self.throttle.detail_delay(
                        self.config.detail_delay_base, self.config.detail_delay_jitter
                    )
                )

        return enhanced + tail

    def enhance_all(self, records: List[Record], budget: Optional[int] = None) -> List[Record]:
        """Like :meth:`enhance` but falls back to ``records`` if the stage fails."""
        try:
            return self.enhance(records, budget)
        except Exception as e:  # pylint: disable=broad-exception-caught
            self.logger.error("Description enhancement failed, returning listings as-is: %s", str(e))
            return list(records)

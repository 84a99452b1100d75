import os
from dataclasses import replace
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from core.scrapers.models import PipelineConfig

# Load environment variables from .env file
load_dotenv()


def _optional_float(value: Optional[str]) -> Optional[float]:
    """Parse a float setting where an empty value or 0 disables the limit."""
    if not value:
        return None
    parsed = float(value)
    return parsed if parsed > 0 else None


class Settings:
    """Application settings loaded from environment variables with defaults.

    Configuration comes from the environment (or a .env file) so the same
    build can run locally, in the API container and from the CLI.
    """

    # Project metadata
    PROJECT_NAME = "eBay Listing Scraper"
    PROJECT_VERSION = "0.1.0"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Scraper settings
    BASE_URL = os.getenv("SCRAPER_BASE_URL", "https://www.ebay.com")
    DEFAULT_KEYWORD = os.getenv("SCRAPER_DEFAULT_KEYWORD", "nike")
    MAX_PAGES = int(os.getenv("SCRAPER_MAX_PAGES", "10"))
    DETAIL_BUDGET = int(os.getenv("SCRAPER_DETAIL_BUDGET", "10"))
    TRANSPORT = os.getenv("SCRAPER_TRANSPORT", "http")
    DEDUPE_ACROSS_PAGES = os.getenv("SCRAPER_DEDUPE", "false").lower() in ("1", "true", "yes")

    # Politeness delays, in seconds
    PAGE_DELAY = float(os.getenv("SCRAPER_PAGE_DELAY", "2.0"))
    PAGE_JITTER = float(os.getenv("SCRAPER_PAGE_JITTER", "3.0"))
    PAGE_PROGRESSIVE = float(os.getenv("SCRAPER_PAGE_PROGRESSIVE", "0.5"))
    DETAIL_DELAY = float(os.getenv("SCRAPER_DETAIL_DELAY", "2.0"))
    DETAIL_JITTER = float(os.getenv("SCRAPER_DETAIL_JITTER", "1.0"))

    RUN_TIMEOUT = _optional_float(os.getenv("SCRAPER_RUN_TIMEOUT", "300"))

    def pipeline_config(self, **overrides) -> PipelineConfig:
        """Build the per-run pipeline configuration.

        Keyword arguments whose value is None are ignored, so callers can
        pass optional CLI/API parameters straight through.
        """
        config = PipelineConfig(
            keyword=self.DEFAULT_KEYWORD,
            max_pages=self.MAX_PAGES,
            detail_budget=self.DETAIL_BUDGET,
            page_delay_base=self.PAGE_DELAY,
            page_delay_jitter=self.PAGE_JITTER,
            page_delay_progressive=self.PAGE_PROGRESSIVE,
            detail_delay_base=self.DETAIL_DELAY,
            detail_delay_jitter=self.DETAIL_JITTER,
            run_timeout=self.RUN_TIMEOUT,
            dedupe_across_pages=self.DEDUPE_ACROSS_PAGES,
            transport=self.TRANSPORT,
            base_url=self.BASE_URL,
        )
        return replace(config, **{k: v for k, v in overrides.items() if v is not None})


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


# For direct access in other modules
settings = get_settings()

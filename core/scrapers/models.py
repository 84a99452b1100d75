from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Sentinel values used when a field cannot be determined
UNKNOWN = "unknown"
NO_DESCRIPTION = "no description available"

DEFAULT_BASE_URL = "https://www.ebay.com"


@dataclass(frozen=True)
class Record:
    """A single scraped listing.

    Records are created by the listing extractor with ``description`` set to
    ``UNKNOWN``. The detail enhancer only ever replaces the description;
    every other field is fixed once the record has been extracted.
    """

    name: str
    link: str
    price: str = UNKNOWN
    image: str = UNKNOWN
    description: str = UNKNOWN
    identifier: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-ready representation of this record."""
        return {
            "id": self.identifier,
            "name": self.name,
            "price": self.price,
            "link": self.link,
            "image": self.image,
            "description": self.description,
        }


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable settings for one pipeline run."""

    keyword: str = "nike"
    pages: int = 1
    max_pages: int = 10
    detail_budget: int = 10

    # Pagination delay: base + uniform(0, jitter) + progressive * page
    page_delay_base: float = 2.0
    page_delay_jitter: float = 3.0
    page_delay_progressive: float = 0.5

    # Delay between detail page requests: base + uniform(0, jitter)
    detail_delay_base: float = 2.0
    detail_delay_jitter: float = 1.0

    listing_timeout: float = 10.0
    detail_timeout: float = 15.0
    run_timeout: Optional[float] = 300.0

    dedupe_across_pages: bool = False
    transport: str = "http"
    base_url: str = DEFAULT_BASE_URL


@dataclass
class ScrapeResult:
    """Outcome of a complete pipeline run."""

    keyword: str
    pages_requested: int
    pages_scraped: int
    records: List[Record] = field(default_factory=list)

    @property
    def total_products(self) -> int:
        return len(self.records)

"""Ordered fallback selector chains.

eBay serves several generations of markup for the same page, so every
logical field (title, price, description, ...) is read through a chain of
strategies. Earlier strategies target the most specific, stable markup and
later ones are degraded fallbacks. The first strategy producing a long
enough value wins.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from core.scrapers.models import UNKNOWN
from core.scrapers.text import normalize

logger = logging.getLogger("scraper.selectors")

Extractor = Callable[[Any], Optional[str]]


@dataclass(frozen=True)
class Strategy:
    """A named way of pulling one value out of a document or element."""

    name: str
    extract: Extractor

    def __call__(self, scope: Any) -> Optional[str]:
        return self.extract(scope)


def text_of(css: str) -> Strategy:
    """Strategy returning the text of the first element matching ``css``."""

    def extract(scope):
        element = scope.select_one(css)
        if element is None:
            return None
        return element.get_text(" ", strip=True)

    return Strategy(css, extract)


def attr_of(css: str, *attributes: str) -> Strategy:
    """Strategy returning the first present attribute of the first match."""

    def extract(scope):
        element = scope.select_one(css)
        if element is None:
            return None
        for attribute in attributes:
            value = element.get(attribute)
            if value:
                return value
        return None

    return Strategy(f"{css}@{'|'.join(attributes)}", extract)


def resolve(
    scope: Any,
    strategies: Sequence[Strategy],
    threshold: int = 0,
    default: str = UNKNOWN,
    clean: Callable[[Optional[str]], str] = normalize,
) -> str:
    """Return the first cleaned strategy result longer than ``threshold``.

    A strategy that raises counts as a miss. ``default`` is returned when
    every strategy misses.
    """
    for strategy in strategies:
        try:
            value = clean(strategy(scope))
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.debug("Strategy %s failed: %s", strategy.name, e)
            continue
        if len(value) > threshold:
            return value
    return default


@dataclass(frozen=True)
class SelectorConfig:
    """CSS selectors and strategy chains for eBay listing and detail pages."""

    containers: Tuple[str, ...]
    title: Tuple[Strategy, ...]
    price: Tuple[Strategy, ...]
    link: Tuple[Strategy, ...]
    image: Tuple[Strategy, ...]
    description: Tuple[Strategy, ...]
    main_content: Tuple[str, ...]


DEFAULT_SELECTORS = SelectorConfig(
    containers=(
        ".s-item__wrapper",
        "li.s-item",
        "li.s-card",
        "ul.srp-results > li",
    ),
    title=(
        text_of(".s-item__title"),
        text_of(".s-card__title"),
        text_of("[role='heading']"),
        text_of("h3"),
    ),
    price=(
        text_of(".s-item__price"),
        text_of(".s-card__price"),
        text_of("[class*='price']"),
    ),
    link=(
        attr_of("a.s-item__link", "href"),
        attr_of("a.su-link", "href"),
        attr_of("a[href*='/itm/']", "href"),
    ),
    image=(
        attr_of(".s-item__image-img", "src", "data-src"),
        attr_of(".s-card__image", "src", "data-src"),
        attr_of("img", "src", "data-src"),
    ),
    description=(
        text_of(".ux-layout-section-evo__row .ux-textspans"),
        text_of(".d-item-description"),
        text_of(".item-description"),
        text_of("[data-testid='x-item-description']"),
        text_of(".desc"),
    ),
    main_content=("main", ".main", "#main", ".item-detail", ".product-detail"),
)

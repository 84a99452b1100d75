"""Shared fixtures.

No test touches the network: pipelines run on a ``FakeFetcher`` serving
canned HTML, and delays go through a ``RecordingThrottle`` that notes the
requested pause instead of sleeping.
"""

import pytest
from bs4 import BeautifulSoup

from core.scrapers.models import PipelineConfig
from core.scrapers.pagination import build_page_url
from core.scrapers.throttle import Throttle

BASE_URL = "https://www.ebay.com"


def listing_item(item_id, title, price="$59.99", image=True, new_listing=False):
    """HTML for one search result card in eBay's ``s-item`` markup."""
    badge = '<span class="LIGHT_HIGHLIGHT">New Listing</span>' if new_listing else ""
    img = (
        f'<img class="s-item__image-img" src="https://i.ebayimg.com/images/{item_id}.jpg">'
        if image
        else ""
    )
    return f"""
    <li class="s-item">
      <div class="s-item__wrapper">
        <div class="s-item__image">{img}</div>
        <div class="s-item__info">
          <a class="s-item__link" href="https://www.ebay.com/itm/some-slug/{item_id}?hash=item{item_id}&amdata=enc%3Atrack">
            <div class="s-item__title">{badge}<span role="heading">{title}</span>
              <span class="clipped">Opens in a new window or tab</span></div>
          </a>
          <span class="s-item__price">{price}</span>
        </div>
      </div>
    </li>
    """


def listing_page(*items):
    return f'<html><body><ul class="srp-results">{"".join(items)}</ul></body></html>'


def detail_page(description=None, main_text=None):
    parts = []
    if description is not None:
        parts.append(f'<div class="d-item-description">{description}</div>')
    if main_text is not None:
        parts.append(f"<main><p>{main_text}</p></main>")
    return f"<html><body>{''.join(parts)}</body></html>"


def page_url(keyword, page):
    return build_page_url(BASE_URL, keyword, page)


def item_url(item_id):
    return f"{BASE_URL}/itm/{item_id}"


class FakeFetcher:
    """Serves canned HTML by URL.

    A missing URL or a ``None`` value behaves like a failed fetch; an
    exception value is raised from ``fetch``.
    """

    name = "fake"

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.calls = []
        self.entered = False
        self.closed = False

    def fetch(self, url, profile=None):
        self.calls.append((url, profile))
        content = self.pages.get(url)
        if isinstance(content, Exception):
            raise content
        if content is None:
            return None
        return BeautifulSoup(content, "lxml")

    @property
    def urls(self):
        return [url for url, _ in self.calls]

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True
        return False


class RecordingThrottle(Throttle):
    """Throttle with a fixed jitter that records pauses instead of sleeping."""

    def __init__(self, jitter=0.0):
        self.pauses = []
        super().__init__(sleep=self.pauses.append, uniform=lambda low, high: jitter)


@pytest.fixture
def config():
    return PipelineConfig(base_url=BASE_URL, run_timeout=None)


@pytest.fixture
def throttle():
    return RecordingThrottle()

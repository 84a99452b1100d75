"""Headless browser transport.

Same contract as :class:`core.scrapers.fetcher.PageFetcher`, but pages are
rendered by Chromium through Playwright. The browser is started when the
fetcher is entered and always shut down on exit. Playwright is imported
lazily so the HTTP transport works without a browser installed.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from core.scrapers.fetcher import LISTING_PROFILE, RequestProfile


class BrowserFetcher:
    name = "browser"

    def __init__(self, headless: bool = True):
        self.headless = headless
        self.logger = logging.getLogger("scraper.browser")
        self._playwright = None
        self._browser = None
        self._context = None

    def start(self) -> None:
        from playwright.sync_api import sync_playwright  # noqa: PLC0415

        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch(headless=self.headless)
            self._context = self._browser.new_context(
                user_agent=LISTING_PROFILE.headers["User-Agent"],
                locale="en-US",
            )
        except Exception:
            self.close()
            raise
        self.logger.info("Browser session started")

    def fetch(self, url: str, profile: RequestProfile = LISTING_PROFILE) -> Optional[BeautifulSoup]:
        """Render ``url`` and parse the resulting HTML, or return ``None``."""
        from playwright.sync_api import Error as PlaywrightError  # noqa: PLC0415

        if self._context is None:
            raise RuntimeError("BrowserFetcher used before start()")

        self.logger.info("Rendering %s page %s", profile.name, url)
        extra_headers = {k: v for k, v in profile.headers.items() if k != "User-Agent"}
        page = None
        try:
            page = self._context.new_page()
            page.set_extra_http_headers(extra_headers)
            response = page.goto(
                url,
                timeout=int(profile.timeout * 1000),
                wait_until="domcontentloaded",
            )
            if response is None or not response.ok:
                status = response.status if response is not None else "no response"
                self.logger.error("Error fetching %s: %s", url, status)
                return None
            html = page.content()
        except PlaywrightError as e:
            self.logger.error("Error fetching %s: %s", url, str(e))
            return None
        finally:
            if page is not None:
                self._close_page(page, PlaywrightError)

        return BeautifulSoup(html, "lxml")

    def _close_page(self, page, error_type) -> None:
        try:
            page.close()
        except error_type as e:
            self.logger.warning("Could not close page: %s", str(e))

    def close(self) -> None:
        if self._context is not None:
            self._context.close()
            self._context = None
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
        self.logger.info("Browser session closed")

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

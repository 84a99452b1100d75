from unittest.mock import MagicMock

import pytest
import requests

from core.scrapers.base import ScraperConfigError
from core.scrapers.browser_fetcher import BrowserFetcher
from core.scrapers.fetcher import DETAIL_PROFILE, LISTING_PROFILE, PageFetcher
from core.scrapers.scraper_factory import TransportFactory


def _mock_session(text="<html><body><p>ok</p></body></html>", error=None):
    session = MagicMock(spec=requests.Session)
    response = MagicMock()
    response.text = text
    if error is not None:
        response.raise_for_status.side_effect = error
    session.get.return_value = response
    return session


def test_fetch_returns_parsed_document():
    session = _mock_session()

    soup = PageFetcher(session).fetch("https://www.ebay.com/itm/1", DETAIL_PROFILE)

    assert soup.select_one("p").get_text() == "ok"
    session.get.assert_called_once_with(
        "https://www.ebay.com/itm/1",
        headers=DETAIL_PROFILE.headers,
        timeout=15.0,
    )


def test_listing_profile_defaults():
    session = _mock_session()

    PageFetcher(session).fetch("https://www.ebay.com/sch/i.html?_nkw=nike")

    _, kwargs = session.get.call_args
    assert kwargs["timeout"] == 10.0
    assert kwargs["headers"]["User-Agent"].startswith("Mozilla/5.0")
    assert kwargs["headers"] is LISTING_PROFILE.headers


@pytest.mark.parametrize(
    "error",
    [
        requests.exceptions.Timeout("read timed out"),
        requests.exceptions.ConnectionError("connection refused"),
    ],
)
def test_transport_errors_return_none(error):
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = error

    assert PageFetcher(session).fetch("https://www.ebay.com/itm/1") is None


def test_http_error_status_returns_none():
    session = _mock_session(error=requests.exceptions.HTTPError("503 Server Error"))

    assert PageFetcher(session).fetch("https://www.ebay.com/itm/1") is None


def test_session_closed_on_exit_even_after_error():
    session = _mock_session()

    with pytest.raises(RuntimeError):
        with PageFetcher(session):
            raise RuntimeError("boom")

    session.close.assert_called_once()


def test_factory_creates_known_transports():
    assert isinstance(TransportFactory.create("http"), PageFetcher)
    assert isinstance(TransportFactory.create("browser"), BrowserFetcher)
    assert TransportFactory.available() == ["browser", "http"]


def test_factory_rejects_unknown_transport():
    with pytest.raises(ScraperConfigError, match="Unknown transport 'carrier-pigeon'"):
        TransportFactory.create("carrier-pigeon")


def test_browser_fetcher_requires_start():
    pytest.importorskip("playwright")

    with pytest.raises(RuntimeError):
        BrowserFetcher().fetch("https://www.ebay.com/itm/1")


def test_browser_fetcher_close_is_safe_before_start():
    fetcher = BrowserFetcher()

    fetcher.close()

    assert fetcher._browser is None

from bs4 import BeautifulSoup

from core.scrapers.selectors import DEFAULT_SELECTORS, Strategy, attr_of, resolve, text_of
from core.scrapers.text import normalize_description

HTML = """
<html><body>
  <div class="primary"></div>
  <div class="secondary">  Second
     choice  </div>
  <div class="tertiary">Third choice</div>
  <a class="link" data-href="/itm/1">x</a>
</body></html>
"""


def soup():
    return BeautifulSoup(HTML, "lxml")


def test_first_non_empty_strategy_wins():
    strategies = [text_of(".missing"), text_of(".primary"), text_of(".secondary"), text_of(".tertiary")]
    assert resolve(soup(), strategies) == "Second choice"


def test_order_is_significant():
    strategies = [text_of(".tertiary"), text_of(".secondary")]
    assert resolve(soup(), strategies) == "Third choice"


def test_threshold_skips_short_values():
    strategies = [text_of(".tertiary"), text_of(".secondary")]
    # "Third choice" is 12 characters, "Second choice" 13
    assert resolve(soup(), strategies, threshold=12) == "Second choice"


def test_default_returned_when_everything_misses():
    assert resolve(soup(), [text_of(".missing")]) == "unknown"
    assert resolve(soup(), [text_of(".missing")], default="") == ""


def test_raising_strategy_counts_as_miss():
    def explode(scope):
        raise AttributeError("markup changed")

    strategies = [Strategy("broken", explode), text_of(".tertiary")]
    assert resolve(soup(), strategies) == "Third choice"


def test_attr_of_checks_attributes_in_order():
    strategy = attr_of("a.link", "href", "data-href")
    assert strategy(soup()) == "/itm/1"
    assert attr_of("a.missing", "href")(soup()) is None


def test_custom_cleaner_is_applied_before_threshold():
    html = '<div class="d-item-description">★★★★★★★★★★★★ ok</div>'
    result = resolve(
        BeautifulSoup(html, "lxml"),
        DEFAULT_SELECTORS.description,
        threshold=10,
        default="",
        clean=normalize_description,
    )
    assert result == ""

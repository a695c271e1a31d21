import asyncio
import logging

import pytest

from howto_selectors import config
from howto_selectors.utils.selector_util import (
    SelectorNotFoundError,
    count_matches,
    filter_candidate_selectors,
    is_selector_unique,
    require_match,
    resolve_locator,
)


def test_resolve_locator_uses_transformed_selector(make_page, caplog):
    page = make_page()
    with caplog.at_level(logging.DEBUG, logger="howto_selectors.utils.selector_util"):
        locator = resolve_locator(page, 'div:contains("Abusive Bot")')
    assert locator.selector == 'div:has-text("Abusive Bot")'
    assert page.requested == ['div:has-text("Abusive Bot")']
    assert 'Transformed selector: div:contains("Abusive Bot") → div:has-text("Abusive Bot")' in caplog.text


def test_resolve_locator_passes_plain_selector_through(make_page):
    page = make_page()
    assert resolve_locator(page, "button.primary").selector == "button.primary"


def test_count_matches(make_page):
    page = make_page(counts={'text="Save"': 2})
    assert asyncio.run(count_matches(page, ':contains("Save")')) == 2
    assert asyncio.run(count_matches(page, "")) == 0
    assert page.requested == ['text="Save"']


def test_count_matches_reports_engine_errors_as_zero(make_page):
    page = make_page(broken={"div >>> bad"})
    assert asyncio.run(count_matches(page, "div >>> bad")) == 0


def test_is_selector_unique(make_page):
    page = make_page(counts={'li:has-text("Item 1")': 1, 'li:has-text("Item")': 3})
    assert asyncio.run(is_selector_unique(page, 'li:contains("Item 1")'))
    assert not asyncio.run(is_selector_unique(page, "li:contains('Item')"))


def test_require_match_returns_first_match(make_page):
    page = make_page(counts={'span:has-text("Hello World")': 1})
    locator = asyncio.run(require_match(page, "span:contains('Hello World')"))
    assert locator.selector == 'span:has-text("Hello World")'
    assert page.waits == []


def test_require_match_waits_for_late_element(make_page):
    page = make_page(attach_later={'text="Loaded"'})
    locator = asyncio.run(require_match(page, ':contains("Loaded")', timeout=500))
    assert locator.selector == 'text="Loaded"'
    assert page.waits == [('text="Loaded"', "attached", 500)]


def test_require_match_raises_when_nothing_matches(make_page, monkeypatch):
    monkeypatch.setattr(config, "LOCATOR_TIMEOUT_MS", 250)
    page = make_page()
    with pytest.raises(SelectorNotFoundError) as excinfo:
        asyncio.run(require_match(page, 'div:contains("Missing")'))
    assert excinfo.value.selector == 'div:has-text("Missing")'
    assert excinfo.value.original == 'div:contains("Missing")'
    assert str(excinfo.value) == (
        'Selector returned no elements: div:has-text("Missing") (original: div:contains("Missing"))'
    )
    assert page.waits == [('div:has-text("Missing")', "attached", 250)]


def test_require_match_without_wait(make_page):
    page = make_page()
    with pytest.raises(SelectorNotFoundError):
        asyncio.run(require_match(page, "#nothing", timeout=0))
    assert page.waits == []


def test_filter_candidate_selectors():
    candidates = [
        'button:contains("Submit")',
        "",
        None,
        ".jss123 > button",
        ".makeStyles-root-12",
        "div.css-1x2y3z",
        'button:has-text("Submit")',
        "#submit",
    ]
    assert filter_candidate_selectors(candidates) == ['button:has-text("Submit")', "#submit"]

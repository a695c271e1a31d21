import logging
import re
from typing import Iterable, List, Optional

from playwright.async_api import Locator, Page

from howto_selectors import config
from howto_selectors.selector_transform import transform_selector

#### Logging ####

logger = logging.getLogger(__name__)

#### Constants ####
GENERATED_CLASS_PATTERNS: List[str] = [
    r"\.jss\d+",
    r"\.makeStyles-[\w-]+-\d+",
    r"\.css-[a-z0-9]{5,}",
    r"\.sc-[a-zA-Z]{5,}",
]


class SelectorNotFoundError(LookupError):

    def __init__(self, selector: str, original: str):
        self.selector = selector
        self.original = original
        super().__init__(f"Selector returned no elements: {selector} (original: {original})")


def _contains_generated_classes(selector: str) -> bool:
    return any(re.search(pattern, selector) for pattern in GENERATED_CLASS_PATTERNS)


def _transform_and_log(selector: str) -> str:
    transformed = transform_selector(selector)
    if transformed != selector:
        logger.debug(f"Transformed selector: {selector} → {transformed}")
    return transformed


def resolve_locator(page: Page, selector: str) -> Locator:
    return page.locator(_transform_and_log(selector)).first


# --- Core Uniqueness Check ---
async def _count(page: Page, transformed: str) -> int:
    try:
        count = await page.locator(transformed).count()
        logger.debug(f"(count_matches) Selector: '{transformed}', Count: {count}")
        return count
    except Exception as e:
        # Playwright raises for selectors its engine cannot parse.
        logger.debug(f"(count_matches) Error counting matches for '{transformed}': {e}")
        return 0


async def count_matches(page: Page, selector: str) -> int:
    if not selector:
        logger.debug("(count_matches) Empty selector")
        return 0
    return await _count(page, _transform_and_log(selector))


async def is_selector_unique(page: Page, selector: str) -> bool:
    return await count_matches(page, selector) == 1


async def require_match(page: Page, selector: str, timeout: Optional[int] = None) -> Locator:
    """Return the first element matched by ``selector`` in the Playwright dialect.

    When nothing matches yet, waits up to ``timeout`` milliseconds (default
    ``HOWTO_LOCATOR_TIMEOUT_MS``) for an element to attach.

    Raises:
        SelectorNotFoundError: if the selector still matches nothing.
    """
    transformed = _transform_and_log(selector)
    locator = page.locator(transformed).first
    if await _count(page, transformed) > 0:
        return locator

    wait_ms = config.LOCATOR_TIMEOUT_MS if timeout is None else timeout
    if wait_ms <= 0:
        raise SelectorNotFoundError(transformed, selector)
    try:
        await locator.wait_for(state="attached", timeout=wait_ms)
    except Exception as e:
        logger.warning(f"No element for '{transformed}' after {wait_ms}ms: {e}")
        raise SelectorNotFoundError(transformed, selector) from e
    return locator


def filter_candidate_selectors(selectors: Iterable[Optional[str]]) -> List[str]:
    """Transform candidate selectors, dropping empty and generated-class ones."""
    seen = set()
    result: List[str] = []
    for selector in selectors:
        if not selector or not selector.strip():
            continue
        if _contains_generated_classes(selector):
            logger.debug(f"Dropping selector with generated class names: {selector}")
            continue
        transformed = _transform_and_log(selector)
        if transformed in seen:
            continue
        seen.add(transformed)
        result.append(transformed)
    return result

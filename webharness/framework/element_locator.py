"""
================================================================================
Element Locator
================================================================================

Resolves locators into live elements against the current page.

Two lookup tiers:
    - Waiting single-element lookup (resolve/find): waits up to the
      WaitPolicy timeout for the element to become clickable
    - Immediate lookups (find_all/exists): one snapshot of the DOM, no retry

Absence is never raised from here. Every lookup degrades to NotFound,
None, an empty list or False, with a single log record naming the
strategy and identifier.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from typing import Any, List, Optional

from loguru import logger
from playwright.sync_api import (
    Error as PlaywrightError,
    Locator as PlaywrightLocator,
    Page,
    expect,
)

from .locator import (
    Found,
    Locator,
    LocatorStrategy,
    LookupResult,
    NotFound,
    WaitPolicy,
    to_selector,
)


_STRATEGY_LABELS = {
    LocatorStrategy.XPATH: "xPath",
    LocatorStrategy.ID: "id",
    LocatorStrategy.CLASS_NAME: "class name",
}


def describe(locator: Locator) -> str:
    """Human-readable 'strategy: identifier' used in every diagnostic."""
    label = _STRATEGY_LABELS.get(locator.strategy, str(locator.strategy))
    return f"{label}: {locator.identifier}"


def _first_line(error: BaseException) -> str:
    # Playwright errors carry a multi-line call log after the message
    text = str(error).strip()
    return text.splitlines()[0][:200] if text else type(error).__name__


class ElementLocator:
    """
    Locator-strategy dispatch plus the explicit-wait policy.

    Usage:
        >>> elements = ElementLocator(page, WaitPolicy(timeout=10000))
        >>> result = elements.resolve(Locator.id("username"))
        >>> if result:
        ...     result.handle.fill("demo_user")
    """

    def __init__(self, page: Page, wait_policy: Optional[WaitPolicy] = None):
        """
        Args:
            page: Playwright Page of the current session
            wait_policy: Default timeout for waiting lookups
        """
        self.page = page
        self.wait_policy = wait_policy or WaitPolicy()

    def _selector(self, locator: Locator) -> Optional[str]:
        selector = to_selector(locator)
        if selector is None:
            logger.warning(f"Unsupported locator strategy {locator.strategy!r} for: {locator.identifier}")
        return selector

    # =========================================================================
    # Waiting Lookup
    # =========================================================================

    def resolve(self, locator: Locator, timeout: Optional[int] = None) -> LookupResult:
        """
        Wait for the first match to become clickable and return it.

        Clickable means attached, visible and enabled.

        Args:
            locator: Element locator
            timeout: Per-call override in milliseconds

        Returns:
            Found(handle) or NotFound(locator, reason)
        """
        selector = self._selector(locator)
        if selector is None:
            return NotFound(locator, "unsupported strategy")

        timeout = self.wait_policy.resolve(timeout)
        handle = self.page.locator(selector).first

        try:
            self._wait_until_clickable(handle, timeout)
        except (PlaywrightError, AssertionError) as e:
            reason = _first_line(e)
            logger.warning(f"Element not found by {describe(locator)} (waited {timeout} ms): {reason}")
            return NotFound(locator, reason)

        return Found(handle)

    @staticmethod
    def _wait_until_clickable(handle: PlaywrightLocator, timeout: int) -> None:
        deadline = time.monotonic() + timeout / 1000
        handle.wait_for(state="visible", timeout=timeout)
        # Remaining budget may round down to zero
        remaining = max(int((deadline - time.monotonic()) * 1000), 1)
        expect(handle).to_be_enabled(timeout=remaining)

    def find(self, locator: Locator, timeout: Optional[int] = None) -> Optional[Any]:
        """Return the clickable element, or None when it never showed up."""
        result = self.resolve(locator, timeout)
        return result.handle if isinstance(result, Found) else None

    # =========================================================================
    # Immediate Lookups
    # =========================================================================

    def find_all(self, locator: Locator) -> List[Any]:
        """
        Snapshot every element currently matching the locator.

        Returns:
            List of element handles, empty when nothing matches
        """
        selector = self._selector(locator)
        if selector is None:
            return []

        try:
            elements = self.page.locator(selector).all()
        except PlaywrightError as e:
            logger.warning(f"Elements not found by {describe(locator)}: {_first_line(e)}")
            return []

        logger.debug(f"Found {len(elements)} element(s) by {describe(locator)}")
        return elements

    def exists(self, locator: Locator) -> bool:
        """Return True if at least one element matches right now."""
        selector = self._selector(locator)
        if selector is None:
            return False

        try:
            return self.page.locator(selector).count() > 0
        except PlaywrightError as e:
            logger.debug(f"Presence check failed for {describe(locator)}: {_first_line(e)}")
            return False


__all__ = [
    "ElementLocator",
    "describe",
]

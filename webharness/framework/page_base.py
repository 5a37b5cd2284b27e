"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Element interactions that tolerate absent elements
    - Explicit visibility waits that fail loudly
    - Navigation relative to a base URL
    - Screenshot and failure capture for Allure

Page-specific subclasses only declare locators and compose these methods.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

import allure
from loguru import logger
from playwright.sync_api import (
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)

from harness_tools.report_tools.allure_utils import attach_png, attach_text

from .browser_provisioner import SessionHandle
from .element_locator import ElementLocator, describe
from .exceptions import ElementInteractionError, WaitTimeoutError
from .locator import Found, Locator, LocatorLike, WaitPolicy, as_locator, to_selector


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent.parent / "screenshots"

# Moves the caret to the end of a text control so typed text is appended
_CARET_TO_END_JS = """
el => {
    if (typeof el.value === "string" && typeof el.setSelectionRange === "function") {
        try {
            el.setSelectionRange(el.value.length, el.value.length);
        } catch (e) {}
    }
}
"""


class BasePage:
    """
    Base class for all page objects.

    Every interaction degrades gracefully when its element is absent:
    a log record and a no-op or default value. The two visibility waits
    are the exception and raise WaitTimeoutError.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login"

            USERNAME = Locator.id("username")
            PASSWORD = Locator.id("password")
            SUBMIT = Locator.xpath("//button[@type='submit']")

            def login(self, username: str, password: str) -> None:
                self.enter_text(self.USERNAME, username)
                self.enter_text(self.PASSWORD, password)
                self.click(self.SUBMIT)
    """

    # Override in subclasses
    URL_PATH: str = "/"

    def __init__(
        self,
        page: Page,
        wait_policy: Optional[WaitPolicy] = None,
        base_url: str = "",
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            wait_policy: Default explicit-wait timeout
            base_url: Base URL for the application
        """
        self.page = page
        self.wait_policy = wait_policy or WaitPolicy()
        self.elements = ElementLocator(page, self.wait_policy)
        if not base_url:
            base_url = os.getenv("UI_BASE_URL", "http://localhost:3000")
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_session(cls, session: SessionHandle, base_url: str = "") -> "BasePage":
        """Build a page object bound to a provisioned session."""
        if not base_url:
            base_url = str(session.config.custom.get("base_url", ""))
        return cls(
            session.page,
            wait_policy=WaitPolicy(timeout=session.config.wait_timeout),
            base_url=base_url,
        )

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    def navigate(self, wait_for: str = "load") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.URL_PATH}"):
            self.page.goto(self.url, wait_until=wait_for)
            logger.debug(f"Navigated to: {self.url}")

    # =========================================================================
    # Element Access
    # =========================================================================

    def get_element(self, locator: Locator, timeout: Optional[int] = None) -> Optional[Any]:
        """Clickable element for the locator, or None."""
        return self.elements.find(locator, timeout)

    def get_elements(self, locator: Locator) -> List[Any]:
        """All elements currently matching the locator (never None)."""
        return self.elements.find_all(locator)

    def is_present(self, locator: Locator) -> bool:
        """Immediate presence check; False on any lookup failure."""
        return self.elements.exists(locator)

    # =========================================================================
    # Interactions
    # =========================================================================

    def click(self, locator: Locator, timeout: Optional[int] = None) -> None:
        """
        Click an element once it becomes clickable.

        Args:
            locator: Element locator
            timeout: Per-call wait override in milliseconds
        """
        with allure.step(f"Click: {locator}"):
            result = self.elements.resolve(locator, timeout)
            if not isinstance(result, Found):
                return
            result.handle.click(timeout=self.wait_policy.resolve(timeout))
            logger.info(f"Clicked element with {describe(locator)}")

    def clear(self, locator: Locator, timeout: Optional[int] = None) -> None:
        """Clear a text field."""
        result = self.elements.resolve(locator, timeout)
        if isinstance(result, Found):
            result.handle.clear(timeout=self.wait_policy.resolve(timeout))

    def enter_text(self, locator: Locator, text: str, timeout: Optional[int] = None) -> None:
        """
        Type text into a field, appending to any existing value.

        Keystrokes are simulated one by one so key handlers fire as they
        would for a real user.
        """
        with allure.step(f"Enter text into {locator}"):
            result = self.elements.resolve(locator, timeout)
            if not isinstance(result, Found):
                return
            handle = result.handle
            handle.focus()
            handle.evaluate(_CARET_TO_END_JS)
            handle.press_sequentially(text, timeout=self.wait_policy.resolve(timeout))
            logger.debug(f"Entered {len(text)} character(s) into {describe(locator)}")

    def get_text(self, locator: Locator, timeout: Optional[int] = None) -> Optional[str]:
        """
        Visible text of an element.

        Returns:
            Rendered text, or None when the element is absent
        """
        result = self.elements.resolve(locator, timeout)
        if not isinstance(result, Found):
            return None
        return result.handle.inner_text()

    def get_attribute(
        self,
        locator: Locator,
        attribute: str,
        timeout: Optional[int] = None,
    ) -> str:
        """
        Attribute value of an element.

        ``value`` reads the live value of form controls rather than the
        markup attribute, so text typed by enter_text is visible here.

        Returns:
            Attribute value, or "" when the element or attribute is absent
        """
        result = self.elements.resolve(locator, timeout)
        if not isinstance(result, Found):
            return ""

        handle = result.handle
        value: Optional[str] = None
        if attribute == "value":
            try:
                value = handle.input_value()
            except PlaywrightError:
                # Not a form control, fall back to the markup attribute
                value = None

        if value is None:
            value = handle.get_attribute(attribute)

        if value is None:
            logger.debug(f"Attribute '{attribute}' not present on {describe(locator)}")
            return ""
        return value

    def select_by_value(self, locator: Locator, value: str, timeout: Optional[int] = None) -> None:
        """
        Select a drop-down option by its value.

        Raises:
            ElementInteractionError: The element is not a select control or
                has no such option
        """
        with allure.step(f"Select '{value}' in {locator}"):
            result = self.elements.resolve(locator, timeout)
            if not isinstance(result, Found):
                return
            try:
                result.handle.select_option(value=value, timeout=self.wait_policy.resolve(timeout))
            except PlaywrightError as e:
                raise ElementInteractionError(
                    f"Cannot select value {value!r} on element with {describe(locator)}",
                    locator=locator,
                ) from e
            logger.info(f"Selected '{value}' on element with {describe(locator)}")

    # =========================================================================
    # Wait Utilities
    # =========================================================================

    def wait_for_visible(self, target: LocatorLike, timeout: Optional[int] = None) -> None:
        """
        Block until the element is visible.

        Args:
            target: Locator, or an XPath expression
            timeout: Per-call override in milliseconds

        Raises:
            WaitTimeoutError: The element did not become visible in time
        """
        self._wait_for_state(as_locator(target), "visible", timeout)

    def wait_for_invisible(self, target: LocatorLike, timeout: Optional[int] = None) -> None:
        """
        Block until the element is hidden or gone from the DOM.

        Raises:
            WaitTimeoutError: The element was still visible when time ran out
        """
        self._wait_for_state(as_locator(target), "hidden", timeout)

    def _wait_for_state(self, locator: Locator, state: str, timeout: Optional[int]) -> None:
        selector = to_selector(locator)
        if selector is None:
            raise ValueError(f"Unsupported locator strategy: {locator.strategy!r}")

        timeout = self.wait_policy.resolve(timeout)
        with allure.step(f"Wait for {locator} to be {state}"):
            try:
                self.page.locator(selector).first.wait_for(state=state, timeout=timeout)
            except PlaywrightTimeoutError as e:
                raise WaitTimeoutError(
                    f"Element with {describe(locator)} was not {state} after {timeout} ms",
                    locator=locator,
                    state=state,
                    timeout=timeout,
                ) from e

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    def screenshot(self, name: str, full_page: bool = False, attach_to_allure: bool = True) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        self.page.screenshot(path=str(filepath), full_page=full_page)
        if attach_to_allure:
            attach_png(filepath.read_bytes(), name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    def capture_failure(self, test_name: str) -> None:
        """Attach a screenshot and the current URL to the report."""
        with allure.step("Capture failure details"):
            self.screenshot(f"failure_{test_name}", attach_to_allure=True)
            attach_text(self.page.url, name="Current URL")


__all__ = [
    "BasePage",
    "SCREENSHOT_DIR",
]

"""
In-memory stand-ins for the Playwright objects the harness talks to.

FakePage maps selector strings to lists of FakeElement. FakeLocator follows
the sync Locator API closely enough for the element-access layer: waiting
honours the requested timeout in real time, so use short timeouts.
"""

import time
from typing import Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError


POLL_INTERVAL = 0.005


class FakeElement:
    def __init__(
        self,
        tag: str = "div",
        text: str = "",
        value: Optional[str] = None,
        attributes: Optional[Dict[str, str]] = None,
        visible: bool = True,
        enabled: bool = True,
        options: Optional[List[str]] = None,
        visible_after: float = 0.0,
        hidden_after: Optional[float] = None,
    ):
        self.tag = tag
        self.text = text
        self.value = value if value is not None else ""
        self.attributes = dict(attributes or {})
        self.visible = visible
        self.enabled = enabled
        self.options = list(options or [])
        self.selected: Optional[str] = None
        self.clicks = 0
        created = time.monotonic()
        self._visible_at = created + visible_after
        self._hidden_at = None if hidden_after is None else created + hidden_after

    def is_visible(self) -> bool:
        now = time.monotonic()
        if self._hidden_at is not None and now >= self._hidden_at:
            return False
        return self.visible and now >= self._visible_at


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str, index: Optional[int] = None):
        self.page = page
        self.selector = selector
        self.index = index

    def _matches(self) -> List[FakeElement]:
        if self.selector in self.page.broken_selectors:
            raise PlaywrightError(f"Unexpected token while parsing selector \"{self.selector}\"")
        return self.page.elements.get(self.selector, [])

    def _target(self) -> Optional[FakeElement]:
        matches = self._matches()
        index = self.index or 0
        return matches[index] if index < len(matches) else None

    def _require(self) -> FakeElement:
        element = self._target()
        if element is None:
            raise PlaywrightTimeoutError(f"waiting for locator(\"{self.selector}\")")
        return element

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, 0)

    def all(self) -> List["FakeLocator"]:
        return [FakeLocator(self.page, self.selector, i) for i in range(len(self._matches()))]

    def count(self) -> int:
        return len(self._matches())

    def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self.page.waits.append((self.selector, state, timeout))
        deadline = time.monotonic() + (timeout or 0) / 1000
        while True:
            element = self._target()
            visible = element is not None and element.is_visible()
            if (state == "visible" and visible) or (state == "hidden" and not visible):
                return
            if time.monotonic() >= deadline:
                raise PlaywrightTimeoutError(
                    f"Locator.wait_for: Timeout {timeout}ms exceeded.\n"
                    f"Call log:\n  - waiting for locator(\"{self.selector}\") to be {state}"
                )
            time.sleep(POLL_INTERVAL)

    def is_enabled(self) -> bool:
        return self._require().enabled

    def click(self, timeout: Optional[float] = None) -> None:
        self._require().clicks += 1

    def clear(self, timeout: Optional[float] = None) -> None:
        self._require().value = ""

    def focus(self) -> None:
        self.page.focused = self._require()

    def evaluate(self, expression: str, arg=None):
        self._require()
        return None

    def press_sequentially(self, text: str, timeout: Optional[float] = None) -> None:
        self._require().value += text

    def inner_text(self) -> str:
        return self._require().text

    def input_value(self) -> str:
        element = self._require()
        if element.tag not in ("input", "textarea", "select"):
            raise PlaywrightError("Error: Node is not an <input>, <textarea> or <select> element")
        return element.value

    def get_attribute(self, name: str) -> Optional[str]:
        return self._require().attributes.get(name)

    def select_option(self, value: Optional[str] = None, timeout: Optional[float] = None) -> List[str]:
        element = self._require()
        if element.tag != "select":
            raise PlaywrightError("Error: Element is not a <select> element")
        if value not in element.options:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for option {value!r}")
        element.selected = value
        element.value = value
        return [value]


class FakePage:
    def __init__(self, url: str = "http://localhost:3000/"):
        self.elements: Dict[str, List[FakeElement]] = {}
        self.broken_selectors: set = set()
        self.waits: list = []
        self.focused: Optional[FakeElement] = None
        self.url = url
        self.goto_calls: list = []

    def add(self, selector: str, *elements: FakeElement) -> None:
        self.elements.setdefault(selector, []).extend(elements)

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def goto(self, url: str, wait_until: str = "load") -> None:
        self.goto_calls.append((url, wait_until))
        self.url = url


class FakeExpectation:
    def __init__(self, locator: FakeLocator):
        self.locator = locator

    def to_be_enabled(self, timeout: Optional[float] = None) -> None:
        if not self.locator.is_enabled():
            raise AssertionError("Locator expected to be enabled\nActual value: disabled")


# ================================================================================
# Browser Launch Fakes
# ================================================================================

class FakeContext:
    def __init__(self, options: dict):
        self.options = options
        self.closed = False
        self.pages: list = []

    def new_page(self):
        page = FakePage()
        page.default_timeout = None
        page.set_default_timeout = lambda ms: setattr(page, "default_timeout", ms)
        self.pages.append(page)
        return page

    def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self, fail_context: bool = False):
        self.contexts: List[FakeContext] = []
        self.closed = False
        self.fail_context = fail_context

    def new_context(self, **options) -> FakeContext:
        if self.fail_context:
            raise PlaywrightError("Target page, context or browser has been closed")
        context = FakeContext(options)
        self.contexts.append(context)
        return context

    def close(self) -> None:
        self.closed = True


class FakeBrowserType:
    def __init__(self, name: str):
        self.name = name
        self.launches: List[dict] = []
        self.error: Optional[Exception] = None
        self.fail_context = False
        self.browsers: List[FakeBrowser] = []

    def launch(self, **options) -> FakeBrowser:
        self.launches.append(options)
        if self.error is not None:
            raise self.error
        browser = FakeBrowser(fail_context=self.fail_context)
        self.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self):
        self.chromium = FakeBrowserType("chromium")
        self.firefox = FakeBrowserType("firefox")
        self.webkit = FakeBrowserType("webkit")
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True



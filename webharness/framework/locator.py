"""
================================================================================
Locator Model
================================================================================

Value types shared by the element-access layer:
    - LocatorStrategy: closed set of supported lookup strategies
    - Locator: immutable (strategy, identifier) pair
    - WaitPolicy: default explicit-wait timeout
    - Found / NotFound: outcome of a single-element lookup

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union


# Playwright timeouts are expressed in milliseconds
DEFAULT_TIMEOUT_MS = 30000


class LocatorStrategy(Enum):
    """Supported element lookup strategies."""

    XPATH = "xpath"
    ID = "id"
    CLASS_NAME = "class_name"


@dataclass(frozen=True)
class Locator:
    """
    Immutable description of how to find an element.

    The identifier is interpreted according to the strategy: an XPath
    expression, an ``id`` attribute value, or a single class name token.

    Usage:
        >>> Locator.xpath("//button[@type='submit']")
        >>> Locator.id("username")
        >>> Locator.class_name("toast-error")
    """

    strategy: LocatorStrategy
    identifier: str

    @classmethod
    def xpath(cls, expression: str) -> "Locator":
        return cls(LocatorStrategy.XPATH, expression)

    @classmethod
    def id(cls, value: str) -> "Locator":
        return cls(LocatorStrategy.ID, value)

    @classmethod
    def class_name(cls, token: str) -> "Locator":
        return cls(LocatorStrategy.CLASS_NAME, token)

    def __str__(self) -> str:
        strategy = getattr(self.strategy, "value", self.strategy)
        return f"{strategy}={self.identifier!r}"


LocatorLike = Union[Locator, str]


def as_locator(target: LocatorLike) -> Locator:
    """Coerce a bare string into an XPath locator."""
    if isinstance(target, Locator):
        return target
    return Locator.xpath(target)


@dataclass(frozen=True)
class WaitPolicy:
    """
    Explicit-wait configuration for one session.

    Attributes:
        timeout: Default timeout in milliseconds for every waiting call
    """

    timeout: int = DEFAULT_TIMEOUT_MS

    def resolve(self, override: Optional[int] = None) -> int:
        """
        Return the per-call override if given, otherwise the default.

        Never below 1 ms: Playwright reads a zero timeout as "wait forever".
        """
        timeout = self.timeout if override is None else override
        return max(int(timeout), 1)


# =============================================================================
# Lookup Results
# =============================================================================

@dataclass(frozen=True)
class Found:
    """A single element resolved successfully."""

    handle: Any

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFound:
    """
    No usable element matched the locator.

    Attributes:
        locator: The locator that was resolved
        reason: Short human-readable cause
    """

    locator: Any
    reason: str = ""

    def __bool__(self) -> bool:
        return False


LookupResult = Union[Found, NotFound]


# =============================================================================
# Strategy Dispatch
# =============================================================================

_CSS_IDENT_SAFE = re.compile(r"[A-Za-z0-9_-]")


def _escape_css_identifier(token: str) -> str:
    """Escape a class name token for use in a CSS selector (CSSOM serialize-an-identifier)."""
    escaped = []
    for index, char in enumerate(token):
        code = ord(char)
        if code == 0:
            escaped.append("\ufffd")
        elif code < 0x20 or code == 0x7F:
            escaped.append(f"\\{code:x} ")
        elif "0" <= char <= "9" and (index == 0 or (index == 1 and token[0] == "-")):
            escaped.append(f"\\{code:x} ")
        elif char == "-" and len(token) == 1:
            escaped.append("\\-")
        elif _CSS_IDENT_SAFE.match(char) or code > 0x7F:
            escaped.append(char)
        else:
            escaped.append(f"\\{char}")
    return "".join(escaped)


# Each strategy maps to its native Playwright selector engine
_SELECTOR_BUILDERS: Dict[LocatorStrategy, Callable[[str], str]] = {
    LocatorStrategy.XPATH: lambda identifier: f"xpath={identifier}",
    LocatorStrategy.ID: lambda identifier: f"id={identifier}",
    LocatorStrategy.CLASS_NAME: lambda identifier: f".{_escape_css_identifier(identifier)}",
}


def to_selector(locator: Locator) -> Optional[str]:
    """
    Translate a locator into a Playwright selector string.

    Returns:
        Selector string, or None when the strategy is not supported
    """
    builder = _SELECTOR_BUILDERS.get(locator.strategy)
    if builder is None:
        return None
    return builder(locator.identifier)


__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "LocatorStrategy",
    "Locator",
    "LocatorLike",
    "as_locator",
    "WaitPolicy",
    "Found",
    "NotFound",
    "LookupResult",
    "to_selector",
]

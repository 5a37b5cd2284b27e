"""
================================================================================
Session Configuration
================================================================================

Immutable browser session settings, read once per test run.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from loguru import logger

from .locator import DEFAULT_TIMEOUT_MS


CustomValue = Union[str, int, bool]


class BrowserProfile(str, Enum):
    """Browsers that have a registered launcher."""

    FIREFOX = "firefox"
    CHROME = "chrome"
    EDGE = "edge"


@dataclass(frozen=True)
class SessionConfig:
    """
    Browser session settings.

    Attributes:
        profile: Browser profile name - 'firefox', 'chrome', 'edge'
        headless: Launch without a visible window
        fullscreen: Request a fullscreen window (ignored when headless)
        width: Window width, used only when not fullscreen
        height: Window height, used only when not fullscreen
        custom: Free-form named values for page-specific tests
        executable_path: Browser binary to launch instead of the bundled one
        channel: Branded browser channel (e.g. 'msedge', 'chrome')
        wait_timeout: Default explicit-wait timeout in milliseconds
    """

    profile: Optional[str] = BrowserProfile.CHROME.value
    headless: bool = False
    fullscreen: bool = False
    width: int = -1
    height: int = -1
    custom: Mapping[str, CustomValue] = field(default_factory=dict)
    executable_path: Optional[str] = None
    channel: Optional[str] = None
    wait_timeout: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        # Freeze the custom mapping so the config stays immutable end to end
        object.__setattr__(self, "custom", MappingProxyType(dict(self.custom)))

    @property
    def has_window_size(self) -> bool:
        """True when width and height describe a usable window."""
        return self.width > 0 and self.height > 0

    def get_custom(self, tag: str, default: Optional[CustomValue] = None) -> Optional[CustomValue]:
        """Return a custom value by tag name, logging when it is missing."""
        if tag not in self.custom:
            logger.warning(f"Custom parameter not configured: custom.{tag}")
            return default
        return self.custom[tag]


__all__ = [
    "BrowserProfile",
    "SessionConfig",
]

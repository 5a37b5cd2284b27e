"""
================================================================================
Harness Exceptions
================================================================================

Errors that surface to the calling test. Routine absence of an element is
never one of these; it resolves to a default value plus a log record.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional


class HarnessError(Exception):
    """Base class for all errors raised by the harness."""
    pass


class ProvisioningError(HarnessError):
    """Raised when a browser session cannot be provisioned."""

    def __init__(self, message: str, profile: Optional[str] = None):
        super().__init__(message)
        self.profile = profile


class WaitTimeoutError(HarnessError):
    """Raised when an explicit visibility wait does not complete in time."""

    def __init__(
        self,
        message: str,
        locator: Any = None,
        state: str = "",
        timeout: Optional[int] = None,
    ):
        super().__init__(message)
        self.locator = locator
        self.state = state
        self.timeout = timeout


class ElementInteractionError(HarnessError):
    """Raised when a control is driven in a way it does not support."""

    def __init__(self, message: str, locator: Any = None):
        super().__init__(message)
        self.locator = locator


__all__ = [
    "HarnessError",
    "ProvisioningError",
    "WaitTimeoutError",
    "ElementInteractionError",
]

"""
================================================================================
Browser Harness Framework
================================================================================

Playwright-based element access and session provisioning.

Components:
    - locator: Locator strategies, wait policy and lookup results
    - element_locator: Waiting and immediate element lookups
    - page_base: Base page object with tolerant interactions
    - browser_provisioner: Browser launch and session lifecycle
    - parameter_reader: YAML parameters with environment overrides
    - fixtures: Pytest plugin for per-test sessions

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_provisioner import BrowserProvisioner, SessionHandle, provision
from .element_locator import ElementLocator
from .exceptions import (
    ElementInteractionError,
    HarnessError,
    ProvisioningError,
    WaitTimeoutError,
)
from .locator import Found, Locator, LocatorStrategy, NotFound, WaitPolicy
from .page_base import BasePage
from .parameter_reader import ParameterReader, load_session_config
from .session_config import BrowserProfile, SessionConfig

__all__ = [
    "BasePage",
    "BrowserProfile",
    "BrowserProvisioner",
    "ElementInteractionError",
    "ElementLocator",
    "Found",
    "HarnessError",
    "Locator",
    "LocatorStrategy",
    "NotFound",
    "ParameterReader",
    "ProvisioningError",
    "SessionConfig",
    "SessionHandle",
    "WaitPolicy",
    "WaitTimeoutError",
    "load_session_config",
    "provision",
]

"""
================================================================================
Browser Session Fixtures
================================================================================

Pytest plugin that wires configuration, provisioning and teardown together.

Key Features:
- Parameters read once per test run
- Exactly one browser session per test, closed even when the test fails
- Screenshot, URL and page source attached to Allure on failure

Enable it from a conftest.py:

    pytest_plugins = ["webharness.framework.fixtures"]

================================================================================
"""

from typing import Generator

import pytest
from loguru import logger
from playwright.sync_api import Error as PlaywrightError, Page

from harness_tools.common import init_logger
from harness_tools.report_tools.allure_utils import attach_html, attach_png, attach_text

from .browser_provisioner import BrowserProvisioner, SessionHandle
from .parameter_reader import ParameterReader
from .session_config import SessionConfig


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def parameter_reader() -> ParameterReader:
    """Session-scoped parameter reader."""
    return ParameterReader()


@pytest.fixture(scope="session")
def session_config(parameter_reader: ParameterReader) -> SessionConfig:
    """
    Session-scoped, immutable browser settings.

    Also configures logging from the same parameters file.
    """
    init_logger(
        level=parameter_reader.get("logging.level"),
        log_file=parameter_reader.get("logging.file"),
    )
    config = parameter_reader.session_config()
    logger.info(
        f"Session config: profile={config.profile}, headless={config.headless}, "
        f"fullscreen={config.fullscreen}, size={config.width}x{config.height}"
    )
    return config


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="function")
def browser_session(session_config: SessionConfig) -> Generator[SessionHandle, None, None]:
    """
    Function-scoped browser session.

    Setup provisions a fresh session; teardown closes it on every exit path.
    """
    session = BrowserProvisioner(session_config).provision()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def page(browser_session: SessionHandle) -> Page:
    """Playwright page of the current browser session."""
    return browser_session.page


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Attach failure evidence for tests that used a browser session.

    Runs before fixture teardown, so the session is still open.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    session = getattr(item, "funcargs", {}).get("browser_session")
    if session is None or session.closed:
        return

    try:
        attach_png(session.page.screenshot(full_page=True), name="failure_screenshot")
        attach_text(session.page.url, name="Current URL")
        attach_html(session.page.content(), name="Page source")
    except PlaywrightError as e:
        # Log but don't fail if capture fails
        logger.warning(f"Failed to capture failure evidence: {e}")

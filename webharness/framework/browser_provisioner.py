"""
================================================================================
Browser Provisioner
================================================================================

Turns a SessionConfig into a live browser session.

Features:
    - One launcher per browser profile (firefox, chrome, edge)
    - Browser-specific headless invocation flags
    - Fullscreen or fixed window geometry for headed sessions
    - Per-launch browser binary selection (no process-wide state)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple

import allure
from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    sync_playwright,
)

from .exceptions import ProvisioningError
from .session_config import BrowserProfile, SessionConfig


# =============================================================================
# Launchers
# =============================================================================

class BrowserLauncher:
    """
    Launch recipe for one browser profile.

    Subclasses declare which Playwright engine to use and how that browser
    spells its headless and fullscreen switches; the flag syntax differs
    per browser and is never shared.
    """

    profile: BrowserProfile
    engine: str = "chromium"
    headless_args: Tuple[str, ...] = ()
    fullscreen_args: Tuple[str, ...] = ()
    default_channel: Optional[str] = None

    def launch_options(self, config: SessionConfig) -> Dict[str, Any]:
        """Build keyword arguments for ``BrowserType.launch``."""
        args: List[str] = []
        if config.headless:
            args.extend(self.headless_args)
        elif config.fullscreen:
            args.extend(self.fullscreen_args)

        options: Dict[str, Any] = {"headless": config.headless, "args": args}

        channel = config.channel or self.default_channel
        if channel:
            options["channel"] = channel
        if config.executable_path:
            options["executable_path"] = config.executable_path

        return options

    def context_options(self, config: SessionConfig) -> Dict[str, Any]:
        """
        Build keyword arguments for ``Browser.new_context``.

        Headless sessions get no geometry step at all.
        """
        if config.headless:
            return {}

        if config.fullscreen:
            # Let the page follow the fullscreen window instead of a fixed viewport
            return {"no_viewport": True}

        if not config.has_window_size:
            logger.warning(
                f"Window size {config.width}x{config.height} is not usable, "
                f"keeping the browser default for {self.profile.value}"
            )
            return {}

        return {"viewport": {"width": config.width, "height": config.height}}

    def launch(self, playwright: Playwright, config: SessionConfig) -> Browser:
        browser_type = getattr(playwright, self.engine)
        options = self.launch_options(config)
        logger.debug(f"Launching {self.profile.value} via {self.engine}: {options}")
        return browser_type.launch(**options)


class FirefoxLauncher(BrowserLauncher):
    profile = BrowserProfile.FIREFOX
    engine = "firefox"
    headless_args = ("-headless",)
    fullscreen_args = ("--kiosk",)


class ChromeLauncher(BrowserLauncher):
    profile = BrowserProfile.CHROME
    engine = "chromium"
    headless_args = ("--headless",)
    fullscreen_args = ("--start-fullscreen",)


class EdgeLauncher(BrowserLauncher):
    profile = BrowserProfile.EDGE
    engine = "chromium"
    headless_args = ("--headless", "--disable-gpu")
    fullscreen_args = ("--start-fullscreen",)
    default_channel = "msedge"


DEFAULT_LAUNCHERS: Dict[BrowserProfile, BrowserLauncher] = {
    launcher.profile: launcher
    for launcher in (FirefoxLauncher(), ChromeLauncher(), EdgeLauncher())
}


# =============================================================================
# Session Handle
# =============================================================================

class SessionHandle:
    """
    One live browser session: Playwright runtime, browser, context and page.

    The handle owns every resource it holds. ``close()`` releases them in
    reverse order and is safe to call more than once.

    Usage:
        with BrowserProvisioner(config).provision() as session:
            session.page.goto("https://example.com")
    """

    def __init__(
        self,
        playwright: Playwright,
        browser: Browser,
        context: BrowserContext,
        page: Page,
        config: SessionConfig,
    ):
        self._playwright = playwright
        self._browser = browser
        self._context = context
        self._page = page
        self.config = config
        self._closed = False

    def __enter__(self) -> "SessionHandle":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def page(self) -> Page:
        return self._page

    @property
    def browser(self) -> Browser:
        return self._browser

    @property
    def context(self) -> BrowserContext:
        return self._context

    @property
    def closed(self) -> bool:
        return self._closed

    def is_headless(self) -> bool:
        return self.config.headless

    def close(self) -> None:
        """Close context and browser, then stop Playwright."""
        if self._closed:
            return
        self._closed = True

        for name, release in (
            ("context", self._context.close),
            ("browser", self._browser.close),
            ("playwright", self._playwright.stop),
        ):
            try:
                release()
            except PlaywrightError as e:
                logger.warning(f"Failed to close {name}: {e}")

        logger.debug(f"Browser session closed: {self.config.profile}")


# =============================================================================
# Provisioner
# =============================================================================

class BrowserProvisioner:
    """
    Builds browser sessions from a SessionConfig.

    Usage:
        provisioner = BrowserProvisioner(config)
        session = provisioner.provision()
        try:
            ...
        finally:
            session.close()
    """

    def __init__(
        self,
        config: SessionConfig,
        launchers: Optional[Dict[BrowserProfile, BrowserLauncher]] = None,
        playwright_factory: Callable[[], Any] = sync_playwright,
    ):
        """
        Initialize provisioner.

        Args:
            config: Session settings
            launchers: Profile -> launcher registry (DEFAULT_LAUNCHERS if None)
            playwright_factory: Returns an object whose ``start()`` yields a
                running Playwright instance
        """
        self.config = config
        self._launchers = dict(DEFAULT_LAUNCHERS if launchers is None else launchers)
        self._playwright_factory = playwright_factory

    def is_headless(self) -> bool:
        return self.config.headless

    def _select_launcher(self) -> BrowserLauncher:
        profile_name = self.config.profile
        try:
            profile = BrowserProfile(str(profile_name).strip().lower())
        except ValueError as e:
            raise ProvisioningError(
                f"Unknown browser profile: {profile_name!r}. "
                f"Expected one of: {', '.join(p.value for p in BrowserProfile)}",
                profile=profile_name,
            ) from e

        launcher = self._launchers.get(profile)
        if launcher is None:
            raise ProvisioningError(
                f"No launcher registered for browser profile: {profile.value}",
                profile=profile.value,
            )
        return launcher

    def provision(self) -> SessionHandle:
        """
        Launch the configured browser and open a page.

        Returns:
            SessionHandle owned by the caller

        Raises:
            ProvisioningError: Unknown profile or the browser failed to start
        """
        launcher = self._select_launcher()
        logger.info(
            f"Provisioning {launcher.profile.value} "
            f"(headless={self.config.headless}, fullscreen={self.config.fullscreen})"
        )

        with allure.step(f"Provision browser: {launcher.profile.value}"):
            try:
                playwright = self._playwright_factory().start()
            except (PlaywrightError, OSError) as e:
                raise ProvisioningError(
                    f"Playwright driver failed to start for {launcher.profile.value}: {e}",
                    profile=launcher.profile.value,
                ) from e

            browser: Optional[Browser] = None
            try:
                browser = launcher.launch(playwright, self.config)
                context = browser.new_context(**launcher.context_options(self.config))
                page = context.new_page()
                page.set_default_timeout(self.config.wait_timeout)
            except PlaywrightError as e:
                self._abort_launch(playwright, browser)
                raise ProvisioningError(
                    f"Browser {launcher.profile.value} failed to start: {e}",
                    profile=launcher.profile.value,
                ) from e

        return SessionHandle(playwright, browser, context, page, self.config)

    @staticmethod
    def _abort_launch(playwright: Playwright, browser: Optional[Browser]) -> None:
        if browser is not None:
            try:
                browser.close()
            except PlaywrightError as e:
                logger.warning(f"Failed to close browser after launch error: {e}")
        try:
            playwright.stop()
        except PlaywrightError as e:
            logger.warning(f"Failed to stop Playwright after launch error: {e}")


def provision(config: SessionConfig) -> SessionHandle:
    """Provision a session with the default launcher registry."""
    return BrowserProvisioner(config).provision()


__all__ = [
    "BrowserLauncher",
    "FirefoxLauncher",
    "ChromeLauncher",
    "EdgeLauncher",
    "DEFAULT_LAUNCHERS",
    "SessionHandle",
    "BrowserProvisioner",
    "provision",
]

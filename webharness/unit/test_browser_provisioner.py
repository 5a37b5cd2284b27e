from types import SimpleNamespace

import pytest
from playwright.sync_api import Error as PlaywrightError

from webharness.framework.browser_provisioner import BrowserProvisioner, ChromeLauncher
from webharness.framework.exceptions import ProvisioningError
from webharness.framework.session_config import BrowserProfile, SessionConfig


def _provision(config, playwright_factory, **kwargs):
    return BrowserProvisioner(config, playwright_factory=playwright_factory, **kwargs).provision()


def test_chrome_headless_uses_headless_flag_without_sizing(fake_playwright, playwright_factory):
    config = SessionConfig(profile="chrome", headless=True, width=1024, height=768)

    session = _provision(config, playwright_factory)

    launch = fake_playwright.chromium.launches[0]
    assert launch["headless"] is True
    assert "--headless" in launch["args"]
    context = fake_playwright.chromium.browsers[0].contexts[0]
    assert context.options == {}
    assert session.is_headless() is True


def test_firefox_headed_gets_exact_window_size(fake_playwright, playwright_factory):
    config = SessionConfig(profile="firefox", headless=False, fullscreen=False, width=1024, height=768)

    _provision(config, playwright_factory)

    launch = fake_playwright.firefox.launches[0]
    assert launch["headless"] is False
    assert launch["args"] == []
    context = fake_playwright.firefox.browsers[0].contexts[0]
    assert context.options == {"viewport": {"width": 1024, "height": 768}}
    assert fake_playwright.chromium.launches == []


def test_firefox_headless_flag_syntax(fake_playwright, playwright_factory):
    _provision(SessionConfig(profile="firefox", headless=True), playwright_factory)
    assert fake_playwright.firefox.launches[0]["args"] == ["-headless"]


def test_edge_headless_flags_and_channel(fake_playwright, playwright_factory):
    _provision(SessionConfig(profile="edge", headless=True), playwright_factory)

    launch = fake_playwright.chromium.launches[0]
    assert launch["args"] == ["--headless", "--disable-gpu"]
    assert launch["channel"] == "msedge"


def test_fullscreen_ignores_window_size(fake_playwright, playwright_factory):
    config = SessionConfig(profile="chrome", fullscreen=True, width=800, height=600)

    _provision(config, playwright_factory)

    launch = fake_playwright.chromium.launches[0]
    assert launch["args"] == ["--start-fullscreen"]
    assert fake_playwright.chromium.browsers[0].contexts[0].options == {"no_viewport": True}


def test_unusable_window_size_keeps_browser_default(fake_playwright, playwright_factory, log_records):
    _provision(SessionConfig(profile="chrome", width=-1, height=-1), playwright_factory)

    assert fake_playwright.chromium.browsers[0].contexts[0].options == {}
    assert any("not usable" in r["message"] for r in log_records)


def test_executable_path_is_passed_per_launch(fake_playwright, playwright_factory):
    config = SessionConfig(profile="chrome", headless=True, executable_path="/opt/chrome/chrome")

    _provision(config, playwright_factory)

    assert fake_playwright.chromium.launches[0]["executable_path"] == "/opt/chrome/chrome"


def test_page_uses_configured_wait_timeout(playwright_factory):
    session = _provision(SessionConfig(profile="chrome", wait_timeout=5000), playwright_factory)
    assert session.page.default_timeout == 5000


def test_profile_is_case_insensitive(fake_playwright, playwright_factory):
    _provision(SessionConfig(profile=" Firefox "), playwright_factory)
    assert len(fake_playwright.firefox.launches) == 1


@pytest.mark.parametrize("profile", ["safari", "", None])
def test_unknown_profile_fails_before_starting_playwright(profile):
    def factory():
        raise AssertionError("Playwright must not start for an unknown profile")

    with pytest.raises(ProvisioningError) as excinfo:
        BrowserProvisioner(SessionConfig(profile=profile), playwright_factory=factory).provision()

    assert excinfo.value.profile == profile


def test_profile_without_registered_launcher(playwright_factory):
    launchers = {BrowserProfile.CHROME: ChromeLauncher()}

    with pytest.raises(ProvisioningError, match="No launcher registered"):
        _provision(SessionConfig(profile="edge"), playwright_factory, launchers=launchers)


def test_launch_failure_is_surfaced_and_cleaned_up(fake_playwright, playwright_factory):
    fake_playwright.chromium.error = PlaywrightError("Executable doesn't exist at /nope/chrome")

    with pytest.raises(ProvisioningError) as excinfo:
        _provision(SessionConfig(profile="chrome"), playwright_factory)

    assert excinfo.value.profile == "chrome"
    assert isinstance(excinfo.value.__cause__, PlaywrightError)
    assert fake_playwright.stopped is True


def test_driver_start_failure_is_surfaced_as_provisioning_error():
    def broken_driver():
        raise PlaywrightError("Driver process exited unexpectedly")

    def factory():
        return SimpleNamespace(start=broken_driver)

    with pytest.raises(ProvisioningError) as excinfo:
        _provision(SessionConfig(profile="edge"), factory)

    assert excinfo.value.profile == "edge"
    assert isinstance(excinfo.value.__cause__, PlaywrightError)


def test_context_failure_closes_launched_browser(fake_playwright, playwright_factory):
    fake_playwright.firefox.fail_context = True

    with pytest.raises(ProvisioningError):
        _provision(SessionConfig(profile="firefox"), playwright_factory)

    assert fake_playwright.firefox.browsers[0].closed is True
    assert fake_playwright.stopped is True


def test_close_releases_everything_once(fake_playwright, playwright_factory):
    with _provision(SessionConfig(profile="chrome"), playwright_factory) as session:
        assert session.closed is False

    browser = fake_playwright.chromium.browsers[0]
    assert session.closed is True
    assert browser.contexts[0].closed is True
    assert browser.closed is True
    assert fake_playwright.stopped is True

    session.close()


def test_close_runs_when_body_fails(fake_playwright, playwright_factory):
    with pytest.raises(RuntimeError):
        with _provision(SessionConfig(profile="chrome"), playwright_factory):
            raise RuntimeError("test body failed")

    assert fake_playwright.chromium.browsers[0].closed is True
    assert fake_playwright.stopped is True


def test_provisioner_mirrors_headless_setting():
    assert BrowserProvisioner(SessionConfig(headless=True)).is_headless() is True
    assert BrowserProvisioner(SessionConfig(headless=False)).is_headless() is False

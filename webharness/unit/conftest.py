"""
================================================================================
Unit Test Fixtures
================================================================================

Fixtures that swap Playwright for the in-memory fakes in ``fakes.py``.

================================================================================
"""

from types import SimpleNamespace

import pytest
from loguru import logger

from webharness.framework.parameter_reader import ParameterReader
from webharness.unit.fakes import FakeExpectation, FakePage, FakePlaywright


# ================================================================================
# Fixtures
# ================================================================================

@pytest.fixture(autouse=True)
def fake_expect(monkeypatch):
    """Route Playwright's expect() to the fake locator."""
    monkeypatch.setattr("webharness.framework.element_locator.expect", FakeExpectation)


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_playwright() -> FakePlaywright:
    return FakePlaywright()


@pytest.fixture
def playwright_factory(fake_playwright):
    """Stand-in for sync_playwright: factory().start() yields the fake."""
    return lambda: SimpleNamespace(start=lambda: fake_playwright)


@pytest.fixture
def log_records():
    """Capture loguru records emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def reset_parameter_reader():
    ParameterReader.reset()
    yield
    ParameterReader.reset()

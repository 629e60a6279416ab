"""
Test fixtures and configuration.
"""

from unittest.mock import MagicMock

import pytest

from asynchof.reporter import SystemReporter, set_reporter


@pytest.fixture
def sink() -> MagicMock:
    """Line sink double recording every logged line."""
    return MagicMock(name="sink")


@pytest.fixture(autouse=True)
def reporter():
    """Fresh process reporter per test, restored lazily afterwards."""
    reporter = SystemReporter(name="asynchof-tests")
    set_reporter(reporter)
    yield reporter
    set_reporter(None)

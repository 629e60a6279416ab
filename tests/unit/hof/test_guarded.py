"""
Unit tests for guarded operations.

Tests failure logging, error passthrough and context binding.

Usage:
    pytest tests/unit/hof/test_guarded.py
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from asynchof.hof.guarded import GuardConfig, guarded, log_error
from tests.helpers import BASIC_DURATION


async def working(name):
    await asyncio.sleep(BASIC_DURATION / 10)
    return f"Hello {name}"


async def failing(*args):
    await asyncio.sleep(BASIC_DURATION / 10)
    err = ValueError("failure")
    err.other = "pineapple"
    raise err


class TestGuarded:
    """Unit tests for guarded."""

    # ================================================================
    # Passthrough tests
    # ================================================================

    async def test_success_passes_through(self, sink):
        """Test successful result is returned and nothing is logged."""
        guarded_working = guarded(working, log=sink)

        assert await guarded_working("world") == "Hello world"
        sink.assert_not_called()

    async def test_failure_is_reraised_unchanged(self, sink):
        """Test failure re-raises the very same error object."""
        raised = ValueError("boom")

        async def fails():
            raise raised

        with pytest.raises(ValueError) as exc_info:
            await guarded(fails, log=sink)()

        assert exc_info.value is raised

    async def test_failure_keeps_error_attributes(self, sink):
        """Test custom error attributes survive the guard."""
        with pytest.raises(ValueError) as exc_info:
            await guarded(failing, log=sink)("world")

        assert str(exc_info.value) == "failure"
        assert exc_info.value.other == "pineapple"

    # ================================================================
    # Logging tests
    # ================================================================

    async def test_failure_logs_traceback_then_fields(self, sink):
        """Test sink receives the traceback first, then one line per field."""
        with pytest.raises(ValueError):
            await guarded(failing, log=sink)()

        lines = [call.args[0] for call in sink.call_args_list]
        assert len(lines) == 2
        assert lines[0].startswith("Traceback")
        assert "ValueError: failure" in lines[0]
        assert lines[1] == "other = pineapple"

    async def test_synchronous_raise_is_logged(self, sink):
        """Test an operation raising before returning an awaitable is guarded."""

        def raises_immediately():
            raise RuntimeError("sync failure")

        with pytest.raises(RuntimeError, match="sync failure"):
            await guarded(raises_immediately, log=sink)()

        assert sink.call_count == 1
        assert "RuntimeError: sync failure" in sink.call_args.args[0]

    async def test_default_sink_is_reporter_error(self, reporter, monkeypatch):
        """Test failures go to the process reporter when no sink is given."""
        error = MagicMock()
        monkeypatch.setattr(reporter, "error", error)

        with pytest.raises(ValueError):
            await guarded(failing)()

        assert error.call_count == 2

    async def test_sink_failure_propagates(self):
        """Test an exception raised by the sink is not swallowed."""

        def broken_sink(line):
            raise OSError("sink down")

        with pytest.raises(OSError, match="sink down"):
            await guarded(failing, log=broken_sink)()

    async def test_cancellation_is_not_logged(self, sink):
        """Test cancellation propagates without touching the sink."""

        async def slow():
            await asyncio.sleep(10)

        task = asyncio.ensure_future(guarded(slow, log=sink)())
        await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        sink.assert_not_called()

    def test_log_error_writes_each_line(self, sink):
        """Test log_error writes traceback and attributes."""
        err = KeyError("missing")
        err.code = 404

        log_error(err, sink)

        assert sink.call_count == 2
        assert sink.call_args_list[1].args[0] == "code = 404"

    # ================================================================
    # Configuration tests
    # ================================================================

    async def test_context_binding(self, sink):
        """Test operation is bound to the configured context."""

        class Greeter:
            greeting = "Hi"

        async def greet(self, name):
            return f"{self.greeting} {name}"

        guarded_greet = guarded(greet, GuardConfig(context=Greeter(), log=sink))

        assert await guarded_greet("Ada") == "Hi Ada"

    def test_wraps_metadata(self):
        """Test guarded operation keeps the wrapped name."""
        assert guarded(working).__name__ == "working"

    def test_config_is_frozen(self):
        """Test configuration cannot be mutated after construction."""
        config = GuardConfig()

        with pytest.raises(AttributeError):
            config.context = object()

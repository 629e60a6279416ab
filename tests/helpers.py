"""
Shared helpers for execution policy tests.

Durations are in seconds. Timing assertions use a tolerance generous
enough for loaded CI machines.
"""

import asyncio
import time
from contextlib import contextmanager

BASIC_DURATION = 0.1
TOLERANCE = 0.5
CLOCK_SLACK = 0.005
MAX_DURATION_TOLERATED = BASIC_DURATION * (1 + TOLERANCE)


def fails_for_n_times(operation, times, lag=0.01):
    """Wrap operation so its first ``times`` calls fail after ``lag`` seconds."""
    state = {"calls": 0}

    async def failing(*args, **kwargs):
        if state["calls"] < times:
            state["calls"] += 1
            await asyncio.sleep(lag)
            raise ValueError(
                f"Fail time #{state['calls']}, {times - state['calls']} to success."
            )
        return await operation(*args, **kwargs)

    failing.state = state
    return failing


class Elapsed:
    """Wall-clock duration of a block."""

    seconds: float = 0.0


@contextmanager
def executed_within(minimum, maximum):
    """Assert the enclosed block took between minimum and maximum seconds."""
    elapsed = Elapsed()
    start = time.monotonic()
    try:
        yield elapsed
    finally:
        elapsed.seconds = time.monotonic() - start

    assert minimum - CLOCK_SLACK <= elapsed.seconds <= maximum, (
        f"Expected elapsed time {elapsed.seconds:.3f}s "
        f"to be between {minimum}s and {maximum}s"
    )

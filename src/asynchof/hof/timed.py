"""
Timeout pattern for async operations.

Races an operation against a timer. The operation is never cancelled:
when the timer wins, the caller gets TimeoutExceededError while the
operation keeps running and its outcome is discarded.

Do not put a timed operation behind a throttle: throttled calls wait
for earlier batches and can take arbitrarily long. Time first, then
throttle.
"""

import asyncio
from dataclasses import dataclass, replace
from functools import wraps
from typing import Any, Awaitable, Callable, Optional

from asynchof.hof.binding import bind_context
from asynchof.hof.exceptions import TimeoutExceededError
from asynchof.hof.resilient import DEFAULT_TASK


@dataclass(frozen=True)
class TimedConfig:
    """Configuration for timed operations."""

    timeout: float = 1.0
    """Seconds to wait before failing (<= 0 fails immediately)"""

    task: str = DEFAULT_TASK
    """Human-readable label embedded in the timeout message"""

    context: Any = None
    """Object the operation is bound to (None = unbound)"""


def _discard_outcome(future: asyncio.Future) -> None:
    """Retrieve the late outcome so a late failure is not reported as unhandled."""
    if not future.cancelled():
        future.exception()


def timed(
    operation: Callable[..., Awaitable[Any]],
    config: Optional[TimedConfig] = None,
    **overrides: Any,
) -> Callable[..., Awaitable[Any]]:
    """
    Return a version of an async operation that times out.

    Args:
        operation: Callable returning an awaitable
        config: Timeout configuration (defaults if not provided)
        **overrides: Field overrides applied on top of config

    Returns:
        Coroutine function with the same calling convention

    Raises:
        TimeoutExceededError: When the timer fires first

    Example:
        fetch = timed(client.fetch, timeout=2.5, task="fetch orders")
        orders = await fetch("orders")
    """
    config = replace(config or TimedConfig(), **overrides)
    bound = bind_context(operation, config.context)

    @wraps(operation)
    async def timed_operation(*args, **kwargs):
        pending = asyncio.ensure_future(bound(*args, **kwargs))
        pending.add_done_callback(_discard_outcome)

        if config.timeout > 0:
            done, _ = await asyncio.wait({pending}, timeout=config.timeout)
            if pending in done:
                return pending.result()

        raise TimeoutExceededError(config.task, config.timeout)

    return timed_operation


__all__ = [
    "TimedConfig",
    "timed",
]

"""
Batch throttling for async operations.

Useful when firing off a large number of operations without waiting for
each one to complete. Calls are admitted in batches of ``batch_size``; a
batch starts only once every call of the previous batch has settled and
the optional ``delay`` has elapsed.

Algorithm:
- Every call increments an invocation counter
- At each batch boundary the wait chain is replaced by one that waits for
  the previous chain, then for the batch just admitted, then the delay
- Each call runs once the wait chain current at its admission resolves
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from functools import wraps
from typing import Any, Awaitable, Callable, List, Optional

from asynchof.hof.binding import bind_context
from asynchof.hof.guarded import LineSink
from asynchof.reporter import get_reporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThrottleConfig:
    """Configuration for batch throttling."""

    batch_size: int = 100
    """Maximum number of calls executing together"""

    delay: float = 0.0
    """Pause in seconds after a batch settles, before the next one starts"""

    log: Optional[LineSink] = None
    """Line sink for batch progress (None = process reporter's info level)"""

    context: Any = None
    """Object the operation is bound to (None = unbound)"""

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.delay < 0:
            raise ValueError(f"delay must be >= 0, got {self.delay}")


@dataclass
class BatchWindow:
    """Mutable state owned by one throttled operation."""

    count: int = 0
    wait_chain: Optional[asyncio.Future] = None
    admitted: List[asyncio.Future] = field(default_factory=list)


def throttled(
    operation: Callable[..., Awaitable[Any]],
    config: Optional[ThrottleConfig] = None,
    **overrides: Any,
) -> Callable[..., "asyncio.Task[Any]"]:
    """
    Return a version of an async operation that runs in batches.

    The returned callable must be called from a running event loop. It
    does its bookkeeping synchronously, so calls are admitted strictly in
    call order, and returns an asyncio.Task for the call's outcome.

    A failing call only fails its own task; its batch still counts it as
    settled.

    Args:
        operation: Callable returning an awaitable
        config: Throttle configuration (defaults if not provided)
        **overrides: Field overrides applied on top of config

    Returns:
        Callable returning an asyncio.Task

    The returned callable exposes ``window``, its BatchWindow, for
    inspection.

    Example:
        upload = throttled(client.upload, batch_size=10, delay=0.5)
        await asyncio.gather(*(upload(item) for item in items))
    """
    config = replace(config or ThrottleConfig(), **overrides)
    bound = bind_context(operation, config.context)
    window = BatchWindow()

    def log(line: str) -> None:
        (config.log or get_reporter().info)(line)

    async def settle_batch(
        previous: Optional[asyncio.Future],
        batch: List[asyncio.Future],
        count: int,
    ) -> None:
        if previous is not None:
            await asyncio.shield(previous)
        if not batch:
            return

        await asyncio.gather(*batch, return_exceptions=True)
        if config.delay > 0:
            await asyncio.sleep(config.delay)
        try:
            log(f"Completed batch of {len(batch)} ({count} calls admitted)")
        except Exception:
            # the wait chain must resolve whatever the sink does
            logger.exception("Throttle progress sink failed")

    async def admit(chain: asyncio.Future, args, kwargs):
        await asyncio.shield(chain)
        return await bound(*args, **kwargs)

    @wraps(operation)
    def throttled_operation(*args, **kwargs) -> "asyncio.Task[Any]":
        if window.count % config.batch_size == 0:
            window.wait_chain = asyncio.ensure_future(
                settle_batch(window.wait_chain, window.admitted, window.count)
            )
            window.admitted = []

        tail = asyncio.ensure_future(admit(window.wait_chain, args, kwargs))
        window.admitted.append(tail)
        window.count += 1
        return tail

    throttled_operation.window = window
    return throttled_operation


__all__ = [
    "BatchWindow",
    "ThrottleConfig",
    "throttled",
]

"""
Guard pattern for failure observability.

Logs every failure of the wrapped operation, synchronous or asynchronous,
and re-raises it unchanged. Nothing is retried or suppressed.
"""

import traceback
from dataclasses import dataclass, replace
from functools import wraps
from typing import Any, Awaitable, Callable, Optional

from asynchof.hof.binding import bind_context
from asynchof.reporter import get_reporter

LineSink = Callable[[str], Any]


@dataclass(frozen=True)
class GuardConfig:
    """Configuration for guarded operations."""

    context: Any = None
    """Object the operation is bound to (None = unbound)"""

    log: Optional[LineSink] = None
    """Line sink for failures (None = process reporter's error level)"""


def _error_lines(err: BaseException):
    """Yield the traceback first, then one line per attribute of the error."""
    yield "".join(traceback.format_exception(err)).rstrip()
    for key, value in vars(err).items():
        yield f"{key} = {value}"


def log_error(err: BaseException, log: Optional[LineSink] = None) -> None:
    """
    Write an error to a line sink.

    Args:
        err: Error to report
        log: Line sink (default: process reporter's error level)
    """
    sink = log or get_reporter().error
    for line in _error_lines(err):
        sink(line)


def guarded(
    operation: Callable[..., Awaitable[Any]],
    config: Optional[GuardConfig] = None,
    **overrides: Any,
) -> Callable[..., Awaitable[Any]]:
    """
    Return a guarded version of an async operation.

    Args:
        operation: Callable returning an awaitable
        config: Guard configuration (defaults if not provided)
        **overrides: Field overrides applied on top of config

    Returns:
        Coroutine function with the same calling convention

    Example:
        fetch = guarded(client.fetch, log=print)
        await fetch("orders")  # failures printed, then re-raised
    """
    config = replace(config or GuardConfig(), **overrides)
    bound = bind_context(operation, config.context)

    @wraps(operation)
    async def guarded_operation(*args, **kwargs):
        try:
            return await bound(*args, **kwargs)
        except Exception as err:
            log_error(err, config.log)
            raise

    return guarded_operation


__all__ = [
    "GuardConfig",
    "guarded",
    "log_error",
]

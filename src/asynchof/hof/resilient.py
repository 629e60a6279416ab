"""
Retry pattern for transient failures.

Re-invokes a failing operation with the same arguments until it succeeds
or its attempts are used up. Attempts run back to back; compose with
throttling or sleeping operations for pacing.
"""

import logging
from dataclasses import dataclass, replace
from functools import wraps
from typing import Any, Awaitable, Callable, List, Optional

from asynchof.hof.binding import bind_context
from asynchof.hof.exceptions import RetryExhaustedError

logger = logging.getLogger(__name__)

DEFAULT_TASK = "promise resolution"


@dataclass(frozen=True)
class ResilientConfig:
    """Configuration for retry behavior."""

    attempts: int = 3
    """Retries allowed after the first try"""

    task: str = DEFAULT_TASK
    """Human-readable label used in errors and logs"""

    context: Any = None
    """Object the operation is bound to (None = unbound)"""

    def __post_init__(self):
        if self.attempts < 0:
            raise ValueError(f"attempts must be >= 0, got {self.attempts}")


def resilient(
    operation: Callable[..., Awaitable[Any]],
    config: Optional[ResilientConfig] = None,
    **overrides: Any,
) -> Callable[..., Awaitable[Any]]:
    """
    Return a version of an async operation that retries on failure.

    Every call keeps its own ledger of failures. Once more than
    ``attempts`` failures have been recorded, RetryExhaustedError is
    raised carrying the whole ledger.

    Args:
        operation: Callable returning an awaitable
        config: Retry configuration (defaults if not provided)
        **overrides: Field overrides applied on top of config

    Returns:
        Coroutine function with the same calling convention

    Raises:
        RetryExhaustedError: When all attempts failed

    Example:
        fetch = resilient(client.fetch, attempts=5, task="fetch orders")
        orders = await fetch("orders")
    """
    config = replace(config or ResilientConfig(), **overrides)
    bound = bind_context(operation, config.context)
    total = config.attempts + 1

    @wraps(operation)
    async def resilient_operation(*args, **kwargs):
        errors: List[Exception] = []

        while True:
            try:
                result = await bound(*args, **kwargs)
            except Exception as e:
                errors.append(e)

                if len(errors) >= total:
                    raise RetryExhaustedError(
                        config.task, config.attempts, errors
                    ) from ExceptionGroup(f"{config.task} failures", errors)

                logger.warning(
                    f"{config.task}: {type(e).__name__}: {e}. "
                    f"Attempt {len(errors)}/{total}. Retrying..."
                )
                continue

            if errors:
                logger.info(
                    f"{config.task} succeeded on attempt {len(errors) + 1}/{total}"
                )
            return result

    return resilient_operation


__all__ = [
    "DEFAULT_TASK",
    "ResilientConfig",
    "resilient",
]

"""
Retry with timeout.

Convenience composition of resilient and timed: each attempt times out
after ``timeout`` seconds and the whole call retries ``attempts`` times.
One configuration feeds both layers.
"""

from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Optional

from asynchof.hof.resilient import DEFAULT_TASK, ResilientConfig, resilient
from asynchof.hof.timed import TimedConfig, timed


@dataclass(frozen=True)
class ResilientTimedConfig:
    """Configuration shared by the retry and timeout layers."""

    attempts: int = 3
    timeout: float = 1.0
    task: str = DEFAULT_TASK
    context: Any = None


def resilient_timed(
    operation: Callable[..., Awaitable[Any]],
    config: Optional[ResilientTimedConfig] = None,
    **overrides: Any,
) -> Callable[..., Awaitable[Any]]:
    """Return ``resilient(timed(operation))`` configured from one record."""
    config = replace(config or ResilientTimedConfig(), **overrides)

    # context is bound once, by the innermost layer
    timed_operation = timed(
        operation,
        TimedConfig(timeout=config.timeout, task=config.task, context=config.context),
    )
    return resilient(
        timed_operation,
        ResilientConfig(attempts=config.attempts, task=config.task),
    )


__all__ = [
    "ResilientTimedConfig",
    "resilient_timed",
]

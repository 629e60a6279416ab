"""
Execution policy decorators for async operations.

Each factory takes an operation (a callable returning an awaitable) and
returns a new operation with the same calling convention:
- guarded: Logs failures, then re-raises them unchanged
- resilient: Retries failures up to a bounded number of attempts
- timed: Fails with a timeout when the operation takes too long
- throttled: Runs calls in batches of a fixed size
- reuse_in_flight: Shares one execution between concurrent equal calls
- resilient_timed: resilient(timed(operation)) from one configuration

Factories are independent and compose by wrapping, for example
``resilient(timed(fetch))``.
"""

from asynchof.hof.exceptions import (
    PolicyError,
    RetryExhaustedError,
    TimeoutExceededError,
)
from asynchof.hof.guarded import GuardConfig, guarded, log_error
from asynchof.hof.resilient import ResilientConfig, resilient
from asynchof.hof.resilient_timed import ResilientTimedConfig, resilient_timed
from asynchof.hof.reuse_in_flight import (
    ReuseInFlightConfig,
    default_key,
    reuse_in_flight,
)
from asynchof.hof.throttled import BatchWindow, ThrottleConfig, throttled
from asynchof.hof.timed import TimedConfig, timed

__all__ = [
    # Guard
    "GuardConfig",
    "guarded",
    "log_error",
    # Retry
    "ResilientConfig",
    "resilient",
    "RetryExhaustedError",
    # Timeout
    "TimedConfig",
    "timed",
    "TimeoutExceededError",
    # Retry with timeout
    "ResilientTimedConfig",
    "resilient_timed",
    # Throttle
    "BatchWindow",
    "ThrottleConfig",
    "throttled",
    # In-flight dedup
    "ReuseInFlightConfig",
    "default_key",
    "reuse_in_flight",
    # Errors
    "PolicyError",
]

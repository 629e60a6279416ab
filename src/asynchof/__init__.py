"""
Composable execution policies for asyncio operations.
"""

from asynchof.hof import (
    GuardConfig,
    PolicyError,
    ResilientConfig,
    ResilientTimedConfig,
    RetryExhaustedError,
    ReuseInFlightConfig,
    ThrottleConfig,
    TimedConfig,
    TimeoutExceededError,
    guarded,
    resilient,
    resilient_timed,
    reuse_in_flight,
    throttled,
    timed,
)
from asynchof.simple import execute, sleep

__all__ = [
    "GuardConfig",
    "PolicyError",
    "ResilientConfig",
    "ResilientTimedConfig",
    "RetryExhaustedError",
    "ReuseInFlightConfig",
    "ThrottleConfig",
    "TimedConfig",
    "TimeoutExceededError",
    "execute",
    "guarded",
    "resilient",
    "resilient_timed",
    "reuse_in_flight",
    "sleep",
    "throttled",
    "timed",
]

"""
In-flight request deduplication.

Tracks each execution by a key derived from its arguments. A call whose
key is already executing shares that execution instead of starting a new
one. Entries drop out the moment their execution settles, so this is
work deduplication, never a cache of completed results.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, replace
from functools import wraps
from typing import Any, Awaitable, Callable, Dict, Hashable, Mapping, Optional

from asynchof.hof.binding import bind_context

logger = logging.getLogger(__name__)

KeyFunction = Callable[..., Hashable]


def _normalize(value: Any) -> Any:
    """Rewrite mappings so every key is a string JSON can sort."""
    if isinstance(value, Mapping):
        return {repr(key): _normalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return value


def default_key(*args: Any, **kwargs: Any) -> str:
    """
    Derive a deterministic key from call arguments.

    Arguments are serialized structurally. Mapping keys of any type are
    keyed by their repr; values JSON cannot represent fall back to their
    repr. Pass ``create_key`` for anything where that is ambiguous
    (cyclic structures, callables).
    """
    return json.dumps(
        [_normalize(args), _normalize(kwargs)], sort_keys=True, default=repr
    )


@dataclass(frozen=True)
class ReuseInFlightConfig:
    """Configuration for in-flight deduplication."""

    create_key: KeyFunction = default_key
    """Key derivation strategy, called with the call's arguments"""

    ignore_single_none: bool = False
    """Key f(None) like f() instead of as a distinct call"""

    context: Any = None
    """Object the operation is bound to (None = unbound)"""


def reuse_in_flight(
    operation: Callable[..., Awaitable[Any]],
    config: Optional[ReuseInFlightConfig] = None,
    **overrides: Any,
) -> Callable[..., "asyncio.Task[Any]"]:
    """
    Return a version of an async operation that shares in-flight executions.

    The returned callable must be called from a running event loop. The
    key lookup and insert happen synchronously, so back to back calls
    with the same key always share one execution. Every caller receives
    the same asyncio.Task and observes the same result or error.

    Args:
        operation: Callable returning an awaitable
        config: Deduplication configuration (defaults if not provided)
        **overrides: Field overrides applied on top of config

    Returns:
        Callable returning an asyncio.Task

    The returned callable exposes ``inflight``, the live key to task
    table, for inspection.

    Example:
        load_profile = reuse_in_flight(api.load_profile)
        a, b = await asyncio.gather(load_profile("u1"), load_profile("u1"))
        # api.load_profile ran once
    """
    config = replace(config or ReuseInFlightConfig(), **overrides)
    bound = bind_context(operation, config.context)
    inflight: Dict[Hashable, asyncio.Task] = {}

    def key_for(args, kwargs) -> Hashable:
        if config.ignore_single_none and args == (None,) and not kwargs:
            args = ()
        return config.create_key(*args, **kwargs)

    async def execute(key, args, kwargs):
        try:
            return await bound(*args, **kwargs)
        finally:
            inflight.pop(key, None)

    @wraps(operation)
    def deduped_operation(*args, **kwargs) -> "asyncio.Task[Any]":
        key = key_for(args, kwargs)
        existing = inflight.get(key)
        if existing is not None and not existing.done():
            logger.debug(f"Reusing in-flight execution for key {key!r}")
            return existing

        task = asyncio.ensure_future(execute(key, args, kwargs))
        inflight[key] = task
        return task

    deduped_operation.inflight = inflight
    return deduped_operation


__all__ = [
    "KeyFunction",
    "ReuseInFlightConfig",
    "default_key",
    "reuse_in_flight",
]

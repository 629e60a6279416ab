"""One-off guarded execution."""

from typing import Any, Awaitable, Callable

from asynchof.hof.guarded import guarded


async def execute(operation: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
    """
    Run an operation once, logging its failure before re-raising it.

    Example:
        await execute(sync_positions, account_id)
    """
    return await guarded(operation)(*args, **kwargs)

"""Awaitable pause."""

import asyncio


async def sleep(duration: float) -> None:
    """Pause the current task for duration seconds."""
    await asyncio.sleep(duration)

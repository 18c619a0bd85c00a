"""Async helpers for blocking calls and background sends."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Strong references so pending tasks are not garbage collected mid-flight.
_background: set[asyncio.Task[Any]] = set()


async def run_sync(fn: Callable[..., T], *args: object, **kwargs: object) -> T:
    """Run a blocking *fn* in the default executor without stalling the loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(fn, *args, **kwargs))


def fire_and_forget(coro: Coroutine[Any, Any, Any], *, name: str | None = None) -> asyncio.Task[Any]:
    """Schedule *coro* without awaiting it.

    Tasks start in the order they are scheduled. A failure is logged from the
    done callback and never re-raised to the scheduler.
    """
    task = asyncio.get_running_loop().create_task(coro, name=name)
    _background.add(task)
    task.add_done_callback(_on_background_done)
    return task


def _on_background_done(task: asyncio.Task[Any]) -> None:
    _background.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Background task %s failed: %s", task.get_name(), exc, exc_info=exc)

# interlinear/services/single_flight.py
"""
In-flight deduplication for coroutines.

The first caller for a key schedules the work as a task and registers it
before yielding to the event loop; every concurrent caller for the same
key awaits that task instead of starting its own. The entry is dropped as
soon as the task finishes, so a failed attempt can be retried.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Awaitable, Callable, Dict, Hashable, TypeVar

T = TypeVar("T")


class SingleFlight:

    def __init__(self) -> None:
        self._tasks: Dict[Hashable, asyncio.Task] = {}

    async def run(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> T:
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._tasks[key] = task
            task.add_done_callback(partial(self._forget, key))
        # Shielded: one caller being cancelled must not cancel the shared work.
        return await asyncio.shield(task)

    def _forget(self, key: Hashable, task: asyncio.Task) -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]
        if not task.cancelled():
            # Mark the exception retrieved even if every waiter was cancelled.
            task.exception()

    def __contains__(self, key: Hashable) -> bool:
        return key in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

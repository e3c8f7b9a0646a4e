"""In-flight request deduplication."""

import asyncio
from typing import Generic, TypeVar
from collections.abc import Awaitable, Callable


T = TypeVar("T")


class RequestDeduplicator(Generic[T]):
    """
    Collapse concurrent calls for the same key into one running task.

    The first caller for a key starts the producer as a task; callers that
    arrive while it is running await the same task. The entry is dropped as
    soon as the task settles, whether it succeeded or raised, so a failure
    never sticks to the key.
    """

    def __init__(self) -> None:
        self._pending: dict[str, asyncio.Task[T]] = {}

    async def run(self, key: str, producer: Callable[[], Awaitable[T]]) -> T:
        """Run producer for key, or join the run already in flight."""
        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(producer())
            self._pending[key] = task
            task.add_done_callback(lambda done: self._release(key, done))

        # Shield so one cancelled waiter does not cancel the shared task
        return await asyncio.shield(task)

    def pending_count(self) -> int:
        """Number of keys currently in flight."""
        return len(self._pending)

    def _release(self, key: str, task: asyncio.Task[T]) -> None:
        if self._pending.get(key) is task:
            del self._pending[key]

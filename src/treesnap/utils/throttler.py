import asyncio
from asyncio import TaskGroup, Semaphore
from typing import Any, Coroutine


class Throttler:
    """Concurrency throttler that limits the number of simultaneously running tasks.

    schedule() waits for a free slot before handing the coroutine to the task group, so the producer is slowed
    down to the pace of the consumers instead of creating one task per input up front.
    """

    def __init__(self, task_group: TaskGroup, concurrency: int):
        """Initialize the throttler.

        Args:
            task_group: The TaskGroup to which tasks will be added
            concurrency: Maximum number of tasks that can run concurrently
        """
        if concurrency < 1:
            raise ValueError(f"Concurrency must be positive: {concurrency}")

        self._task_group = task_group
        self._semaphore = Semaphore(concurrency)

    async def schedule(self, coro: Coroutine[Any, Any, Any], name: str | None = None) -> asyncio.Task:
        """Schedule a coroutine once a slot is available.

        The slot is released when the task completes, whether it succeeds, fails or is cancelled.
        """
        try:
            await self._semaphore.acquire()
        except BaseException:
            coro.close()
            raise

        async def wrapper():
            try:
                return await coro
            finally:
                self._semaphore.release()

        try:
            return self._task_group.create_task(wrapper(), name=name)
        except BaseException:
            self._semaphore.release()
            coro.close()
            raise

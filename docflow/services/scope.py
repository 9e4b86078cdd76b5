# docflow/services/scope.py

import asyncio
from typing import Awaitable, TypeVar

from loguru import logger

T = TypeVar("T")


class ScopeClosed(Exception):
    """The owning view was torn down; the result must not be applied."""


class ViewScope:
    """
    Owns the in-flight fetches of one view. close() cancels whatever is
    still running, and nothing started afterwards is allowed to run.
    """

    def __init__(self, name: str = "view"):
        self.name = name
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def run(self, awaitable: Awaitable[T]) -> T:
        if self._closed:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise ScopeClosed(self.name)

        task = asyncio.ensure_future(awaitable)
        self._tasks.add(task)
        try:
            result = await task
        except asyncio.CancelledError:
            if self._closed:
                raise ScopeClosed(self.name)
            raise
        finally:
            self._tasks.discard(task)

        # closed while the result was in flight
        if self._closed:
            raise ScopeClosed(self.name)
        return result

    async def gather(self, *awaitables: Awaitable) -> list:
        # asyncio.gather schedules its children at once
        if self._closed:
            for awaitable in awaitables:
                if asyncio.iscoroutine(awaitable):
                    awaitable.close()
            raise ScopeClosed(self.name)
        return await self.run(asyncio.gather(*awaitables))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        pending = [t for t in self._tasks if not t.done()]
        if pending:
            logger.debug(f"Cancelling {len(pending)} in-flight request(s) for {self.name}")
        for task in pending:
            task.cancel()

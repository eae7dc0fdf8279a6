import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


class SingleFlight:
    """Runs at most one invocation of a job at a time.

    A call made while another is in flight is skipped and returns None.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._lock.locked()

    async def run(self, func: Callable[[], Awaitable[T]]) -> T | None:
        if self._lock.locked():
            logger.warning("Job already running, skipping invocation", job=self.name)
            return None
        async with self._lock:
            return await func()

"""Lifespan middleware - storage pool and background sweepers."""

import asyncio
import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

from doclife.application.workers import StatusSweeper

logger = logging.getLogger(__name__)


class LifespanMiddleware:
    """Open the pool, then start each sweeper as a task; undo both in reverse on shutdown.

    Sweepers only run while the pool is open: they are stopped and awaited
    before the pool is closed.
    """

    def __init__(
        self,
        pool: AsyncConnectionPool | None = None,
        sweepers: list[tuple[StatusSweeper, float]] | None = None,
    ) -> None:
        self._pool = pool
        self._sweepers = sweepers or []
        self._stop = asyncio.Event()
        self._tasks: list[asyncio.Task] = []

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        if self._pool is not None:
            await self._pool.open()
        self._stop = asyncio.Event()
        for sweeper, interval in self._sweepers:
            logger.info("Starting %s every %.0f s", sweeper.name, interval)
            self._tasks.append(
                asyncio.create_task(
                    sweeper.run_forever(interval, self._stop), name=sweeper.name
                )
            )

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        self._stop.set()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
        if self._pool is not None:
            await self._pool.close()

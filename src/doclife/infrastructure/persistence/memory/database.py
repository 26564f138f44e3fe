"""Shared in-memory state for the in-memory repositories."""

import asyncio
import itertools
import threading
from collections.abc import Callable
from uuid import UUID

from doclife.domain.entities import ApprovalRecord, Document, HistoryEntry

UndoAction = Callable[[], None]


class InMemoryDatabase:
    """Tables as dicts, guarded by one lock.

    The lock is held only around synchronous dict work, never across an
    await, so it is safe for callers on any event loop or thread.
    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.documents: dict[UUID, Document] = {}
        self.history: dict[UUID, list[HistoryEntry]] = {}
        self.approvals: dict[UUID, ApprovalRecord] = {}
        self._sequence = itertools.count(1)

    def next_sequence(self) -> int:
        with self.lock:
            return next(self._sequence)


async def checkpoint() -> None:
    """Let other tasks run, so concurrent callers interleave as on a real store."""
    await asyncio.sleep(0)

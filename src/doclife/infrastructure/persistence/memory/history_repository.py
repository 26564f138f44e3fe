"""In-memory history repository."""

from uuid import UUID

from doclife.domain.entities import HistoryEntry
from doclife.infrastructure.persistence.memory.database import (
    InMemoryDatabase,
    UndoAction,
    checkpoint,
)


class InMemoryHistoryRepository:
    def __init__(self, db: InMemoryDatabase, journal: list[UndoAction]) -> None:
        self._db = db
        self._journal = journal

    async def append(self, entry: HistoryEntry) -> HistoryEntry:
        await checkpoint()
        with self._db.lock:
            self._db.history.setdefault(entry.document_id, []).append(entry)
        self._journal.append(lambda: self._remove(entry))
        return entry

    async def list_by_document(self, document_id: UUID) -> list[HistoryEntry]:
        await checkpoint()
        with self._db.lock:
            return list(reversed(self._db.history.get(document_id, [])))

    def _remove(self, entry: HistoryEntry) -> None:
        entries = self._db.history.get(entry.document_id, [])
        if entry in entries:
            entries.remove(entry)

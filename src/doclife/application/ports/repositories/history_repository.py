"""History repository port."""

from typing import Protocol
from uuid import UUID

from doclife.domain.entities import HistoryEntry


class HistoryRepository(Protocol):
    """Port for the append-only lifecycle history."""

    async def append(self, entry: HistoryEntry) -> HistoryEntry: ...

    async def list_by_document(self, document_id: UUID) -> list[HistoryEntry]:
        """Entries for a document, newest first."""
        ...

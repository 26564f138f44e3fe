"""In-memory document repository."""

from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from doclife.application.dto.document_dto import DocumentSearchCriteria
from doclife.domain.entities import Document
from doclife.domain.value_objects import DocumentStatus, UpdateOutcome
from doclife.infrastructure.persistence.memory.database import (
    InMemoryDatabase,
    UndoAction,
    checkpoint,
)


class InMemoryDocumentRepository:
    """Document repository backed by ``InMemoryDatabase``.

    Returned documents are copies; the stored row changes only through the
    methods below.
    """

    def __init__(self, db: InMemoryDatabase, journal: list[UndoAction]) -> None:
        self._db = db
        self._journal = journal

    async def get_by_id(self, document_id: UUID) -> Document | None:
        await checkpoint()
        with self._db.lock:
            doc = self._db.documents.get(document_id)
            return replace(doc) if doc else None

    async def get_many(self, document_ids: list[UUID]) -> list[Document]:
        await checkpoint()
        with self._db.lock:
            found = [self._db.documents.get(i) for i in dict.fromkeys(document_ids)]
        return [replace(d) for d in found if d is not None]

    async def create(self, document: Document) -> Document:
        await checkpoint()
        with self._db.lock:
            if document.id in self._db.documents:
                raise ValueError(f"Document {document.id} already exists")
            if any(
                d.document_number == document.document_number
                for d in self._db.documents.values()
            ):
                raise ValueError(f"Document number {document.document_number} already exists")
            self._db.documents[document.id] = replace(document)
        self._journal.append(lambda: self._db.documents.pop(document.id, None))
        return document

    async def next_number_sequence(self) -> int:
        return self._db.next_sequence()

    async def conditional_update_status(
        self,
        document_id: UUID,
        expected_version: int,
        new_status: DocumentStatus,
        updated_at: datetime,
    ) -> UpdateOutcome:
        await checkpoint()
        with self._db.lock:
            current = self._db.documents.get(document_id)
            if current is None:
                return UpdateOutcome.ABSENT
            if current.version != expected_version:
                return UpdateOutcome.VERSION_MISMATCH
            updated = replace(
                current, status=new_status, updated_at=updated_at, version=current.version + 1
            )
            self._db.documents[document_id] = updated
        self._journal.append(lambda: self._restore(current, updated.version))
        return UpdateOutcome.UPDATED

    async def list_by_status(
        self, status: DocumentStatus, *, offset: int = 0, limit: int = 100
    ) -> list[Document]:
        await checkpoint()
        with self._db.lock:
            items = [d for d in self._db.documents.values() if d.status == status]
        items.sort(key=lambda d: (d.created_at, d.id))
        return [replace(d) for d in items[offset : offset + limit]]

    async def search(
        self, criteria: DocumentSearchCriteria, *, offset: int = 0, limit: int = 20
    ) -> tuple[list[Document], int]:
        await checkpoint()
        with self._db.lock:
            items = [d for d in self._db.documents.values() if _matches(d, criteria)]
        items.sort(key=lambda d: (d.created_at, d.id))
        return [replace(d) for d in items[offset : offset + limit]], len(items)

    async def force_status(self, document_id: UUID, status: DocumentStatus) -> None:
        await checkpoint()
        with self._db.lock:
            current = self._db.documents.get(document_id)
            if current is None:
                return
            updated = replace(
                current,
                status=status,
                updated_at=datetime.now(UTC),
                version=current.version + 1,
            )
            self._db.documents[document_id] = updated
        self._journal.append(lambda: self._restore(current, updated.version))

    def _restore(self, previous: Document, written_version: int) -> None:
        # Skip if someone else has written since; their change wins.
        current = self._db.documents.get(previous.id)
        if current is not None and current.version == written_version:
            self._db.documents[previous.id] = previous


def _matches(document: Document, criteria: DocumentSearchCriteria) -> bool:
    if criteria.status is not None and document.status != criteria.status:
        return False
    if criteria.author is not None and document.author != criteria.author:
        return False
    moment = document.created_at if criteria.search_by_created_at else document.updated_at
    if criteria.date_from is not None and moment < criteria.date_from:
        return False
    if criteria.date_to is not None and moment > criteria.date_to:
        return False
    return True

"""In-memory approval registry."""

from uuid import UUID

from doclife.domain.entities import ApprovalRecord
from doclife.domain.exceptions import ApprovalAlreadyExists
from doclife.infrastructure.persistence.memory.database import (
    InMemoryDatabase,
    UndoAction,
    checkpoint,
)


class InMemoryApprovalRepository:
    """Approval registry keyed by document id; insert is check-and-set under the lock."""

    def __init__(self, db: InMemoryDatabase, journal: list[UndoAction]) -> None:
        self._db = db
        self._journal = journal

    async def insert(self, record: ApprovalRecord) -> ApprovalRecord:
        await checkpoint()
        with self._db.lock:
            if record.document_id in self._db.approvals:
                raise ApprovalAlreadyExists(
                    f"Approval already registered for document {record.document_id}"
                )
            self._db.approvals[record.document_id] = record
        self._journal.append(lambda: self._remove(record))
        return record

    async def count_for_document(self, document_id: UUID) -> int:
        await checkpoint()
        with self._db.lock:
            return 1 if document_id in self._db.approvals else 0

    async def purge_for_document(self, document_id: UUID) -> int:
        await checkpoint()
        with self._db.lock:
            record = self._db.approvals.pop(document_id, None)
        if record is None:
            return 0
        self._journal.append(lambda: self._db.approvals.setdefault(document_id, record))
        return 1

    def _remove(self, record: ApprovalRecord) -> None:
        if self._db.approvals.get(record.document_id) is record:
            del self._db.approvals[record.document_id]

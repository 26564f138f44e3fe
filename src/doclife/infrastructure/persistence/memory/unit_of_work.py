"""In-memory Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from doclife.infrastructure.persistence.memory.approval_repository import (
    InMemoryApprovalRepository,
)
from doclife.infrastructure.persistence.memory.database import InMemoryDatabase, UndoAction
from doclife.infrastructure.persistence.memory.document_repository import (
    InMemoryDocumentRepository,
)
from doclife.infrastructure.persistence.memory.history_repository import (
    InMemoryHistoryRepository,
)


class InMemoryUnitOfWork:
    """Writes apply immediately and are journaled; rollback undoes them in reverse."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db
        self._journal: list[UndoAction] = []
        self._documents = InMemoryDocumentRepository(db, self._journal)
        self._history = InMemoryHistoryRepository(db, self._journal)
        self._approvals = InMemoryApprovalRepository(db, self._journal)

    @property
    def documents(self) -> InMemoryDocumentRepository:
        return self._documents

    @property
    def history(self) -> InMemoryHistoryRepository:
        return self._history

    @property
    def approvals(self) -> InMemoryApprovalRepository:
        return self._approvals

    async def commit(self) -> None:
        self._journal.clear()

    async def rollback(self) -> None:
        with self._db.lock:
            while self._journal:
                self._journal.pop()()


def create_uow_factory(db: InMemoryDatabase) -> object:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[InMemoryUnitOfWork]:
        uow = InMemoryUnitOfWork(db)
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return factory

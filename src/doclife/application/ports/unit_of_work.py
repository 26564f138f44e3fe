"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from doclife.application.ports.repositories.approval_repository import (
    ApprovalRepository,
)
from doclife.application.ports.repositories.document_repository import (
    DocumentRepository,
)
from doclife.application.ports.repositories.history_repository import (
    HistoryRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def documents(self) -> DocumentRepository: ...

    @property
    def history(self) -> HistoryRepository: ...

    @property
    def approvals(self) -> ApprovalRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances.

    Calling it returns an async context manager that commits on clean exit
    and rolls back when the block raises.
    """

    def __call__(self) -> AsyncIterator[UnitOfWork]: ...

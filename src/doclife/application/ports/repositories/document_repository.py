"""Document repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from doclife.application.dto.document_dto import DocumentSearchCriteria
from doclife.domain.entities import Document
from doclife.domain.value_objects import DocumentStatus, UpdateOutcome


class DocumentRepository(Protocol):
    """Port for document persistence."""

    async def get_by_id(self, document_id: UUID) -> Document | None: ...

    async def get_many(self, document_ids: list[UUID]) -> list[Document]: ...

    async def create(self, document: Document) -> Document: ...

    async def next_number_sequence(self) -> int: ...

    async def conditional_update_status(
        self,
        document_id: UUID,
        expected_version: int,
        new_status: DocumentStatus,
        updated_at: datetime,
    ) -> UpdateOutcome:
        """Compare-and-swap on ``version``; bumps it on success."""
        ...

    async def list_by_status(
        self, status: DocumentStatus, *, offset: int = 0, limit: int = 100
    ) -> list[Document]: ...

    async def search(
        self, criteria: DocumentSearchCriteria, *, offset: int = 0, limit: int = 20
    ) -> tuple[list[Document], int]: ...

    async def force_status(self, document_id: UUID, status: DocumentStatus) -> None:
        """Overwrite status outside the state machine. Test tooling only."""
        ...

"""Approval registry port."""

from typing import Protocol
from uuid import UUID

from doclife.domain.entities import ApprovalRecord


class ApprovalRepository(Protocol):
    """Port for the approval registry.

    ``insert`` is an atomic insert-if-absent keyed by document id. It raises
    ``ApprovalAlreadyExists`` when a record is already present and
    ``RegistryError`` for any other failure.
    """

    async def insert(self, record: ApprovalRecord) -> ApprovalRecord: ...

    async def count_for_document(self, document_id: UUID) -> int: ...

    async def purge_for_document(self, document_id: UUID) -> int:
        """Delete the document's records. Test tooling only; returns rows removed."""
        ...

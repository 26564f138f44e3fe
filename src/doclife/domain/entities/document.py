"""Document entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from doclife.domain.value_objects import DocumentStatus


@dataclass
class Document:
    """Document moving through the DRAFT -> SUBMITTED -> APPROVED lifecycle.

    ``version`` is the optimistic concurrency token; every successful
    mutation bumps it by one.
    """

    id: UUID
    document_number: str
    author: str
    title: str
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime
    version: int = 0

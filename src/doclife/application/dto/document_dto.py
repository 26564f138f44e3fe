"""Document DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from doclife.domain.entities import Document
from doclife.domain.value_objects import DocumentStatus


@dataclass
class DocumentCreateInput:
    """Input for creating a document."""

    author: str
    title: str


@dataclass
class DocumentOutput:
    """Output DTO for document."""

    id: UUID
    document_number: str
    author: str
    title: str
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime


@dataclass
class HistoryOutput:
    """Output DTO for a history entry."""

    id: UUID
    initiator: str
    action: str
    comment: str | None
    created_at: datetime


@dataclass
class DocumentWithHistoryOutput:
    document: DocumentOutput
    history: list[HistoryOutput] = field(default_factory=list)


@dataclass
class DocumentSearchCriteria:
    """Filters for document search. ``None`` means no filter."""

    status: DocumentStatus | None = None
    author: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    search_by_created_at: bool = True


@dataclass
class DocumentPage:
    items: list[DocumentOutput]
    total: int
    offset: int
    limit: int


def to_document_output(document: Document) -> DocumentOutput:
    return DocumentOutput(
        id=document.id,
        document_number=document.document_number,
        author=document.author,
        title=document.title,
        status=document.status,
        created_at=document.created_at,
        updated_at=document.updated_at,
    )

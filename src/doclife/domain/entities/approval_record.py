"""Approval registry record."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class ApprovalRecord:
    """At most one per document; inserting it decides who wins an approval race."""

    id: UUID
    document_id: UUID
    approved_by: str
    approved_at: datetime
    created_at: datetime
    comment: str | None = None

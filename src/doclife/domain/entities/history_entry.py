"""History entry entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from doclife.domain.value_objects import DocumentAction


@dataclass(frozen=True)
class HistoryEntry:
    """Append-only record of a successful lifecycle transition."""

    id: UUID
    document_id: UUID
    initiator: str
    action: DocumentAction
    created_at: datetime
    comment: str | None = None

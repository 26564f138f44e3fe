"""Domain entities."""

from doclife.domain.entities.approval_record import ApprovalRecord
from doclife.domain.entities.document import Document
from doclife.domain.entities.history_entry import HistoryEntry

__all__ = [
    "ApprovalRecord",
    "Document",
    "HistoryEntry",
]

"""Repository ports."""

from doclife.application.ports.repositories.approval_repository import (
    ApprovalRepository,
)
from doclife.application.ports.repositories.document_repository import (
    DocumentRepository,
)
from doclife.application.ports.repositories.history_repository import (
    HistoryRepository,
)

__all__ = [
    "ApprovalRepository",
    "DocumentRepository",
    "HistoryRepository",
]

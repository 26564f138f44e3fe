"""Search documents use case."""

import logging

from doclife.application.dto.document_dto import (
    DocumentPage,
    DocumentSearchCriteria,
    to_document_output,
)
from doclife.application.ports import UnitOfWorkFactory
from doclife.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class SearchDocumentsUseCase:
    """Filter documents by status, author and a created/updated date range."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, criteria: DocumentSearchCriteria, offset: int = 0, limit: int = 20
    ) -> DocumentPage:
        if offset < 0:
            raise ValidationError("offset must be >= 0")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
        if criteria.date_from and criteria.date_to and criteria.date_from > criteria.date_to:
            raise ValidationError("date_from must not be after date_to")

        logger.info("Searching documents with criteria: %s", criteria)
        async with self._uow_factory() as uow:
            documents, total = await uow.documents.search(criteria, offset=offset, limit=limit)

        return DocumentPage(
            items=[to_document_output(d) for d in documents],
            total=total,
            offset=offset,
            limit=limit,
        )

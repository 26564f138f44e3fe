"""Create document use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from doclife.application.dto.document_dto import (
    DocumentCreateInput,
    DocumentOutput,
    to_document_output,
)
from doclife.application.ports import UnitOfWorkFactory
from doclife.domain.entities import Document
from doclife.domain.exceptions import ValidationError
from doclife.domain.value_objects import DocumentNumber, DocumentStatus

logger = logging.getLogger(__name__)


class CreateDocumentUseCase:
    """Create a DRAFT document with a freshly assigned document number."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, input_data: DocumentCreateInput) -> DocumentOutput:
        author = (input_data.author or "").strip()
        title = (input_data.title or "").strip()
        if not 2 <= len(author) <= 100:
            raise ValidationError("Author must be between 2 and 100 characters")
        if not 1 <= len(title) <= 255:
            raise ValidationError("Title must be between 1 and 255 characters")

        logger.info("Creating new document by author: %s", author)
        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            sequence = await uow.documents.next_number_sequence()
            document = Document(
                id=uuid4(),
                document_number=str(DocumentNumber.build(now.date(), sequence)),
                author=author,
                title=title,
                status=DocumentStatus.DRAFT,
                created_at=now,
                updated_at=now,
                version=0,
            )
            await uow.documents.create(document)

        logger.info(
            "Document created with id: %s, number: %s", document.id, document.document_number
        )
        return to_document_output(document)

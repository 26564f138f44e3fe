"""Get document use cases."""

from uuid import UUID

from doclife.application.dto.document_dto import (
    DocumentOutput,
    DocumentWithHistoryOutput,
    HistoryOutput,
    to_document_output,
)
from doclife.application.ports import UnitOfWorkFactory
from doclife.domain.exceptions import NotFound


class GetDocumentUseCase:
    """Get document by id together with its history, newest entry first."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID) -> DocumentWithHistoryOutput:
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if not document:
                raise NotFound("Document", str(document_id))
            history = await uow.history.list_by_document(document_id)

        return DocumentWithHistoryOutput(
            document=to_document_output(document),
            history=[
                HistoryOutput(
                    id=h.id,
                    initiator=h.initiator,
                    action=str(h.action),
                    comment=h.comment,
                    created_at=h.created_at,
                )
                for h in history
            ],
        )


class GetDocumentsBatchUseCase:
    """Get several documents by id. Unknown ids are skipped; order is not guaranteed."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_ids: list[UUID]) -> list[DocumentOutput]:
        if not document_ids:
            return []
        async with self._uow_factory() as uow:
            documents = await uow.documents.get_many(document_ids)
        return [to_document_output(d) for d in documents]

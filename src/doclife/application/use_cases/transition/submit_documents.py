"""Submit documents use case."""

from uuid import UUID

from doclife.application.dto.operation_dto import BatchOperationInput
from doclife.application.ports import UnitOfWork
from doclife.application.use_cases.transition.batch_transition import BatchTransitionUseCase
from doclife.domain.value_objects import DocumentAction


class SubmitDocumentsUseCase(BatchTransitionUseCase):
    """Move DRAFT documents to SUBMITTED."""

    action = DocumentAction.SUBMIT
    success_message = "Document submitted successfully"

    async def _transition(
        self, uow: UnitOfWork, document_id: UUID, input_data: BatchOperationInput
    ) -> None:
        document = await self._load_for_transition(uow, document_id)
        await self._advance(uow, document, input_data)

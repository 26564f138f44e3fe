"""Approve documents use case."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from doclife.application.dto.operation_dto import BatchOperationInput
from doclife.application.ports import UnitOfWork
from doclife.application.use_cases.transition.batch_transition import BatchTransitionUseCase
from doclife.domain.entities import ApprovalRecord
from doclife.domain.value_objects import DocumentAction


class ApproveDocumentsUseCase(BatchTransitionUseCase):
    """Move SUBMITTED documents to APPROVED.

    The registry insert happens strictly before the status change. The
    registry allows one record per document, so among racing approvals only
    the caller whose insert lands first goes on to change the status; the
    rest get REGISTRY_ERROR and leave the document untouched.
    """

    action = DocumentAction.APPROVE
    success_message = "Document approved successfully"

    async def _transition(
        self, uow: UnitOfWork, document_id: UUID, input_data: BatchOperationInput
    ) -> None:
        document = await self._load_for_transition(uow, document_id)

        now = datetime.now(UTC)
        await uow.approvals.insert(
            ApprovalRecord(
                id=uuid4(),
                document_id=document.id,
                approved_by=input_data.initiator,
                approved_at=now,
                created_at=now,
                comment=input_data.comment,
            )
        )
        await self._advance(uow, document, input_data)

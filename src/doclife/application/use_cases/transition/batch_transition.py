"""Shared per-item loop for batch lifecycle transitions."""

import logging
import time
from datetime import UTC, datetime
from uuid import UUID, uuid4

from doclife.application.dto.operation_dto import BatchOperationInput, OperationResult
from doclife.application.ports import UnitOfWork, UnitOfWorkFactory
from doclife.domain.entities import Document, HistoryEntry
from doclife.domain.exceptions import (
    ConcurrencyConflict,
    InvalidStatusTransition,
    NotFound,
    RegistryError,
)
from doclife.domain.value_objects import DocumentAction, OperationStatus, UpdateOutcome

logger = logging.getLogger(__name__)


class BatchTransitionUseCase:
    """Apply one lifecycle action to every id of a batch, independently.

    Each id runs in its own unit of work: a failure rolls back that item only
    and is reported as a typed result. Items already processed stay applied.
    """

    action: DocumentAction
    success_message: str

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, input_data: BatchOperationInput) -> list[OperationResult]:
        """Process ids in order; returns exactly one result per id."""
        logger.info(
            "Processing %s batch for %d documents", self.action.name, len(input_data.ids)
        )
        started = time.perf_counter()

        results: list[OperationResult] = []
        for document_id in input_data.ids:
            results.append(await self._process_one(document_id, input_data))

        duration_ms = (time.perf_counter() - started) * 1000
        logger.info("%s batch completed in %.0f ms", self.action.name, duration_ms)
        return results

    async def _process_one(
        self, document_id: UUID, input_data: BatchOperationInput
    ) -> OperationResult:
        try:
            async with self._uow_factory() as uow:
                await self._transition(uow, document_id, input_data)
        except NotFound:
            return OperationResult(document_id, OperationStatus.NOT_FOUND, "Document not found")
        except (InvalidStatusTransition, ConcurrencyConflict) as e:
            return OperationResult(document_id, OperationStatus.CONFLICT, str(e))
        except RegistryError as e:
            logger.warning("Failed to create registry entry for document %s: %s", document_id, e)
            return OperationResult(
                document_id,
                OperationStatus.REGISTRY_ERROR,
                f"Failed to register approval: {e}",
            )
        except Exception as e:
            logger.exception("Error processing document %s", document_id)
            return OperationResult(
                document_id,
                OperationStatus.CONFLICT,
                f"Error processing document: {e}",
            )
        return OperationResult(document_id, OperationStatus.SUCCESS, self.success_message)

    async def _transition(
        self, uow: UnitOfWork, document_id: UUID, input_data: BatchOperationInput
    ) -> None:
        raise NotImplementedError

    async def _load_for_transition(self, uow: UnitOfWork, document_id: UUID) -> Document:
        """Fetch the document and check it is in the action's source status."""
        document = await uow.documents.get_by_id(document_id)
        if document is None:
            raise NotFound("Document", str(document_id))
        if not document.status.can_transition_to(self.action.target_status):
            raise InvalidStatusTransition(str(document.status), str(self.action.source_status))
        return document

    async def _advance(
        self, uow: UnitOfWork, document: Document, input_data: BatchOperationInput
    ) -> None:
        """Move the document to the target status against the version read earlier."""
        now = datetime.now(UTC)
        outcome = await uow.documents.conditional_update_status(
            document.id, document.version, self.action.target_status, now
        )
        if outcome is UpdateOutcome.ABSENT:
            raise NotFound("Document", str(document.id))
        if outcome is UpdateOutcome.VERSION_MISMATCH:
            raise ConcurrencyConflict(
                f"Document {document.id} was modified concurrently (version {document.version})"
            )

        await uow.history.append(
            HistoryEntry(
                id=uuid4(),
                document_id=document.id,
                initiator=input_data.initiator,
                action=self.action,
                comment=input_data.comment,
                created_at=now,
            )
        )

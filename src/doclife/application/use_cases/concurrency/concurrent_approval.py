"""Concurrent approval check - fire many approvals at one document at once."""

import asyncio
import logging
from dataclasses import dataclass
from uuid import UUID

from doclife.application.dto.operation_dto import (
    BatchOperationInput,
    ConcurrencyTestInput,
    ConcurrencyTestResult,
)
from doclife.application.ports import UnitOfWorkFactory
from doclife.application.use_cases.transition.approve_documents import ApproveDocumentsUseCase
from doclife.domain.exceptions import NotFound, ValidationError
from doclife.domain.value_objects import DocumentStatus, OperationStatus

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
ATTEMPT_COMMENT = "Concurrency test attempt"


@dataclass
class _AttemptTally:
    """Outcome counters shared by the workers of one run.

    Workers run on a single event loop and never await between reading and
    writing a counter, so plain increments cannot be lost.
    """

    success: int = 0
    conflict: int = 0
    error: int = 0

    def record(self, status: OperationStatus | None) -> None:
        if status is OperationStatus.SUCCESS:
            self.success += 1
        elif status in (OperationStatus.CONFLICT, OperationStatus.REGISTRY_ERROR):
            self.conflict += 1
        else:
            self.error += 1

    def snapshot(self) -> tuple[int, int, int]:
        return self.success, self.conflict, self.error


class ConcurrentApprovalUseCase:
    """Verify that concurrent approvals of one document produce a single winner.

    Launches ``attempts`` single-id approve calls spread over ``threads``
    concurrent workers and waits for them at most ``timeout_seconds``.
    Attempts still running at the deadline are not cancelled; they finish
    in the background and do not affect the returned result.

    A document that is already APPROVED is reset to SUBMITTED (and its
    registry record removed) before the run. That reset bypasses the state
    machine and must only be reachable from test tooling.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        approve_documents: ApproveDocumentsUseCase,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._approve = approve_documents
        self._timeout = timeout_seconds
        self._in_flight: set[asyncio.Task] = set()

    async def execute(self, input_data: ConcurrencyTestInput) -> ConcurrencyTestResult:
        if input_data.threads < 1:
            raise ValidationError("Threads must be at least 1")
        if input_data.attempts < 1:
            raise ValidationError("Attempts must be at least 1")

        logger.info(
            "Starting concurrency test for document %s with %d threads and %d attempts",
            input_data.document_id,
            input_data.threads,
            input_data.attempts,
        )
        was_reset = await self._prepare(input_data.document_id)

        queue: asyncio.Queue[int] = asyncio.Queue()
        for attempt in range(1, input_data.attempts + 1):
            queue.put_nowait(attempt)

        tally = _AttemptTally()
        worker_count = min(input_data.threads, input_data.attempts)
        workers = [
            asyncio.create_task(
                self._worker(queue, tally, input_data), name=f"approve-worker-{i}"
            )
            for i in range(worker_count)
        ]
        for task in workers:
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)

        _, pending = await asyncio.wait(workers, timeout=self._timeout)
        success, conflict, error = tally.snapshot()
        if pending:
            logger.warning(
                "Concurrency test timed out after %.1f s; %d workers still running",
                self._timeout,
                len(pending),
            )

        async with self._uow_factory() as uow:
            final = await uow.documents.get_by_id(input_data.document_id)
            registry_count = await uow.approvals.count_for_document(input_data.document_id)
        final_status = str(final.status) if final else "UNKNOWN"

        logger.info(
            "Concurrency test completed. Success: %d, Conflict: %d, Error: %d, Final status: %s",
            success,
            conflict,
            error,
            final_status,
        )
        return ConcurrencyTestResult(
            document_id=input_data.document_id,
            total_attempts=input_data.attempts,
            successful_attempts=success,
            conflict_attempts=conflict,
            error_attempts=error,
            final_status=final_status,
            registry_entries_count=registry_count,
            details={
                "threads": worker_count,
                "reset_from_approved": was_reset,
                "timed_out": bool(pending),
                "unfinished_attempts": input_data.attempts - (success + conflict + error),
            },
        )

    async def _prepare(self, document_id: UUID) -> bool:
        """Ensure the document exists and is approvable. Returns True if it was reset."""
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if document is None:
                raise NotFound("Document", str(document_id))
            if document.status != DocumentStatus.APPROVED:
                return False
            logger.warning(
                "Resetting document %s from APPROVED to SUBMITTED for concurrency test",
                document_id,
            )
            await uow.documents.force_status(document_id, DocumentStatus.SUBMITTED)
            await uow.approvals.purge_for_document(document_id)
        return True

    async def _worker(
        self,
        queue: "asyncio.Queue[int]",
        tally: _AttemptTally,
        input_data: ConcurrencyTestInput,
    ) -> None:
        while True:
            try:
                attempt = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                results = await self._approve.execute(
                    BatchOperationInput(
                        ids=[input_data.document_id],
                        initiator=input_data.initiator,
                        comment=f"{ATTEMPT_COMMENT} #{attempt}",
                    )
                )
                tally.record(results[0].status)
            except Exception:
                logger.exception("Error in concurrency test attempt %d", attempt)
                tally.record(None)

"""Periodic sweepers that push pending documents through the lifecycle."""

import asyncio
import logging
import time
from collections import Counter
from dataclasses import dataclass, field

from doclife.application.dto.operation_dto import BatchOperationInput
from doclife.application.ports import UnitOfWorkFactory
from doclife.application.use_cases.transition.approve_documents import ApproveDocumentsUseCase
from doclife.application.use_cases.transition.batch_transition import BatchTransitionUseCase
from doclife.application.use_cases.transition.submit_documents import SubmitDocumentsUseCase
from doclife.domain.value_objects import DocumentStatus, OperationStatus

logger = logging.getLogger(__name__)

SUBMIT_WORKER_INITIATOR = "SUBMIT-WORKER"
APPROVE_WORKER_INITIATOR = "APPROVE-WORKER"


@dataclass
class SweepReport:
    """Totals for one sweep cycle."""

    batches: int = 0
    processed: int = 0
    counts: Counter = field(default_factory=Counter)
    error: str | None = None

    @property
    def succeeded(self) -> int:
        return self.counts[OperationStatus.SUCCESS]


class StatusSweeper:
    """Fetch documents in ``source_status`` page by page and run a batch transition.

    Carries no transition logic itself; every decision is made by the use
    case it drives.
    """

    def __init__(
        self,
        name: str,
        unit_of_work_factory: UnitOfWorkFactory,
        transition: BatchTransitionUseCase,
        source_status: DocumentStatus,
        *,
        batch_size: int,
        initiator: str,
        comment: str,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self.name = name
        self._uow_factory = unit_of_work_factory
        self._transition = transition
        self._source_status = source_status
        self._batch_size = batch_size
        self._initiator = initiator
        self._comment = comment

    async def sweep_once(self) -> SweepReport:
        """Run one cycle. Errors end the cycle and are recorded, never raised."""
        logger.info("%s started. Checking for %s documents", self.name, self._source_status)
        started = time.perf_counter()
        report = SweepReport()

        try:
            while True:
                async with self._uow_factory() as uow:
                    page = await uow.documents.list_by_status(
                        self._source_status, offset=0, limit=self._batch_size
                    )
                if not page:
                    logger.info("No more %s documents found", self._source_status)
                    break

                logger.info(
                    "Processing batch of %d %s documents", len(page), self._source_status
                )
                results = await self._transition.execute(
                    BatchOperationInput(
                        ids=[d.id for d in page],
                        initiator=self._initiator,
                        comment=self._comment,
                    )
                )
                batch_counts = Counter(r.status for r in results)
                report.batches += 1
                report.processed += len(results)
                report.counts.update(batch_counts)

                logger.info(
                    "Batch results - Success: %d, Conflict: %d, Not Found: %d, Registry Errors: %d",
                    batch_counts[OperationStatus.SUCCESS],
                    batch_counts[OperationStatus.CONFLICT],
                    batch_counts[OperationStatus.NOT_FOUND],
                    batch_counts[OperationStatus.REGISTRY_ERROR],
                )
                for r in results:
                    if r.status is not OperationStatus.SUCCESS:
                        logger.warning("Document %s: %s (%s)", r.document_id, r.message, r.status)

                if len(page) < self._batch_size:
                    break
                # Failed items stay in the source status and would be fetched again.
                if not batch_counts[OperationStatus.SUCCESS]:
                    logger.warning("%s made no progress; ending cycle", self.name)
                    break
        except Exception as e:
            logger.exception("%s encountered an error", self.name)
            report.error = str(e)

        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s completed. Processed: %d, Success: %d, Failed: %d, Duration: %.0f ms",
            self.name,
            report.processed,
            report.succeeded,
            report.processed - report.succeeded,
            duration_ms,
        )
        return report

    async def run_forever(self, interval_seconds: float, stop_event: asyncio.Event) -> None:
        """Sweep, then wait ``interval_seconds`` (fixed delay) until ``stop_event`` is set."""
        while not stop_event.is_set():
            await self.sweep_once()
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval_seconds)
            except TimeoutError:
                pass


def create_submit_sweeper(
    unit_of_work_factory: UnitOfWorkFactory,
    submit_documents: SubmitDocumentsUseCase,
    batch_size: int = 100,
) -> StatusSweeper:
    return StatusSweeper(
        "SUBMIT-worker",
        unit_of_work_factory,
        submit_documents,
        DocumentStatus.DRAFT,
        batch_size=batch_size,
        initiator=SUBMIT_WORKER_INITIATOR,
        comment="Auto-submitted by background worker",
    )


def create_approve_sweeper(
    unit_of_work_factory: UnitOfWorkFactory,
    approve_documents: ApproveDocumentsUseCase,
    batch_size: int = 100,
) -> StatusSweeper:
    return StatusSweeper(
        "APPROVE-worker",
        unit_of_work_factory,
        approve_documents,
        DocumentStatus.SUBMITTED,
        batch_size=batch_size,
        initiator=APPROVE_WORKER_INITIATOR,
        comment="Auto-approved by background worker",
    )

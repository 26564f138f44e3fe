"""Application entry points and composition root."""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from uuid import UUID

from doclife import __version__
from doclife.application.dto.document_dto import DocumentCreateInput
from doclife.application.dto.operation_dto import BatchOperationInput, ConcurrencyTestInput
from doclife.application.use_cases.concurrency.concurrent_approval import (
    ConcurrentApprovalUseCase,
)
from doclife.application.use_cases.document.create_document import CreateDocumentUseCase
from doclife.application.use_cases.document.get_document import (
    GetDocumentsBatchUseCase,
    GetDocumentUseCase,
)
from doclife.application.use_cases.document.search_documents import SearchDocumentsUseCase
from doclife.application.use_cases.transition.approve_documents import ApproveDocumentsUseCase
from doclife.application.use_cases.transition.submit_documents import SubmitDocumentsUseCase
from doclife.application.workers import create_approve_sweeper, create_submit_sweeper
from doclife.config import Settings, get_settings
from doclife.domain.exceptions import DocLifeError
from doclife.infrastructure.persistence import memory
from doclife.infrastructure.persistence.postgres.connection import (
    check_connection,
    create_pool,
)
from doclife.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory as create_postgres_uow_factory,
)
from doclife.interfaces.api.app import create_app
from doclife.interfaces.api.middleware.lifespan import LifespanMiddleware
from doclife.interfaces.api.resources.documents import (
    DocumentResource,
    DocumentsBatchResource,
    DocumentsResource,
)
from doclife.interfaces.api.resources.health import HealthResource
from doclife.interfaces.api.resources.transitions import TransitionResource

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_storage(settings: Settings):
    """Return (uow_factory, pool or None, readiness check or None) for the configured backend."""
    if settings.storage_backend == "memory":
        return memory.create_uow_factory(memory.InMemoryDatabase()), None, None
    pool = create_pool(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )

    async def readiness() -> bool:
        return await check_connection(pool)

    return create_postgres_uow_factory(pool), pool, readiness


def create_doclife_app(settings: Settings | None = None):
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    uow_factory, pool, readiness = _build_storage(settings)

    submit_documents = SubmitDocumentsUseCase(unit_of_work_factory=uow_factory)
    approve_documents = ApproveDocumentsUseCase(unit_of_work_factory=uow_factory)
    create_document = CreateDocumentUseCase(unit_of_work_factory=uow_factory)
    get_document = GetDocumentUseCase(unit_of_work_factory=uow_factory)
    get_documents_batch = GetDocumentsBatchUseCase(unit_of_work_factory=uow_factory)
    search_documents = SearchDocumentsUseCase(unit_of_work_factory=uow_factory)

    sweepers = []
    if settings.submit_worker_enabled:
        sweepers.append(
            (
                create_submit_sweeper(
                    uow_factory, submit_documents, settings.submit_worker_batch_size
                ),
                settings.submit_worker_interval_seconds,
            )
        )
    if settings.approve_worker_enabled:
        sweepers.append(
            (
                create_approve_sweeper(
                    uow_factory, approve_documents, settings.approve_worker_batch_size
                ),
                settings.approve_worker_interval_seconds,
            )
        )
    middleware = []
    if pool is not None or sweepers:
        middleware.append(LifespanMiddleware(pool, sweepers))

    return create_app(
        documents_resource=DocumentsResource(create_document, search_documents),
        documents_batch_resource=DocumentsBatchResource(get_documents_batch),
        document_resource=DocumentResource(get_document),
        submit_resource=TransitionResource(submit_documents),
        approve_resource=TransitionResource(approve_documents),
        health_resource=HealthResource(readiness),
        middleware=middleware,
    )


def main() -> None:
    """CLI entry point."""
    print(f"DocLife v{__version__}")


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    app = create_doclife_app(settings)
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level=settings.log_level.lower())


def _parse_concurrency_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fire concurrent approvals at one document and report the outcome"
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--document-id",
        type=UUID,
        help=(
            "Existing document to approve (postgres backend only;"
            " the memory backend starts empty)"
        ),
    )
    target.add_argument(
        "--create",
        action="store_true",
        help="Create and submit a fresh document first",
    )
    parser.add_argument("--threads", type=int, default=10, help="Concurrent workers")
    parser.add_argument("--attempts", type=int, default=100, help="Total approve attempts")
    parser.add_argument("--initiator", default="concurrency-test", help="Approver name")
    return parser.parse_args(argv)


async def _run_concurrency_test(settings: Settings, args: argparse.Namespace) -> dict:
    uow_factory, pool, _ = _build_storage(settings)
    if pool is not None:
        await pool.open()
    try:
        approve_documents = ApproveDocumentsUseCase(unit_of_work_factory=uow_factory)
        document_id = args.document_id
        if args.create:
            created = await CreateDocumentUseCase(uow_factory).execute(
                DocumentCreateInput(author=args.initiator, title="Concurrency test document")
            )
            await SubmitDocumentsUseCase(uow_factory).execute(
                BatchOperationInput(ids=[created.id], initiator=args.initiator)
            )
            document_id = created.id

        harness = ConcurrentApprovalUseCase(
            unit_of_work_factory=uow_factory,
            approve_documents=approve_documents,
            timeout_seconds=settings.concurrency_test_timeout_seconds,
        )
        result = await harness.execute(
            ConcurrencyTestInput(
                document_id=document_id,
                threads=args.threads,
                attempts=args.attempts,
                initiator=args.initiator,
            )
        )
        return asdict(result)
    finally:
        if pool is not None:
            await pool.close()


def concurrency_test_main(argv: list[str] | None = None) -> int:
    """Entry point for ``doclife-concurrency-test``.

    Test tooling: it may reset an APPROVED document back to SUBMITTED.
    """
    args = _parse_concurrency_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        result = asyncio.run(_run_concurrency_test(settings, args))
    except DocLifeError as exc:
        logger.error("Concurrency test failed: %s", exc)
        return 1
    print(json.dumps(result, default=str, indent=2))
    ok = result["successful_attempts"] == 1 and result["registry_entries_count"] == 1
    return 0 if ok else 2


if __name__ == "__main__":
    sys.exit(concurrency_test_main())

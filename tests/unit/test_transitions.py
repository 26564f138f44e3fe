"""Unit tests for batch submit/approve transitions."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from doclife.application.dto.operation_dto import BatchOperationInput
from doclife.application.use_cases.transition.approve_documents import ApproveDocumentsUseCase
from doclife.application.use_cases.transition.submit_documents import SubmitDocumentsUseCase
from doclife.domain.exceptions import RegistryError
from doclife.domain.value_objects import (
    DocumentAction,
    DocumentStatus,
    OperationStatus,
    UpdateOutcome,
)
from doclife.infrastructure.persistence.memory.approval_repository import (
    InMemoryApprovalRepository,
)
from doclife.infrastructure.persistence.memory.document_repository import (
    InMemoryDocumentRepository,
)
from doclife.infrastructure.persistence.memory.history_repository import (
    InMemoryHistoryRepository,
)


def _batch(*ids, initiator="bob", comment=None) -> BatchOperationInput:
    return BatchOperationInput(ids=list(ids), initiator=initiator, comment=comment)


# --- SubmitDocumentsUseCase ---


@pytest.mark.asyncio
async def test_submit_draft_document(db, uow_factory, make_document) -> None:
    """Submitting a DRAFT document moves it to SUBMITTED and writes one history entry."""
    doc = make_document()
    use_case = SubmitDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(doc.id, comment="please review"))

    assert len(results) == 1
    assert results[0].document_id == doc.id
    assert results[0].status is OperationStatus.SUCCESS
    assert results[0].message == "Document submitted successfully"
    stored = db.documents[doc.id]
    assert stored.status is DocumentStatus.SUBMITTED
    assert stored.version == 1
    history = db.history[doc.id]
    assert len(history) == 1
    assert history[0].action is DocumentAction.SUBMIT
    assert history[0].initiator == "bob"
    assert history[0].comment == "please review"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [DocumentStatus.SUBMITTED, DocumentStatus.APPROVED])
async def test_submit_non_draft_is_conflict(db, uow_factory, make_document, status) -> None:
    """Submitting a document outside DRAFT reports CONFLICT and changes nothing."""
    doc = make_document(status=status)
    use_case = SubmitDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(doc.id))

    assert results[0].status is OperationStatus.CONFLICT
    assert str(status) in results[0].message
    assert db.documents[doc.id].status is status
    assert db.documents[doc.id].version == 0
    assert doc.id not in db.history


@pytest.mark.asyncio
async def test_submit_unknown_id_is_not_found(db, uow_factory) -> None:
    missing = uuid4()
    use_case = SubmitDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(missing))

    assert results[0].status is OperationStatus.NOT_FOUND
    assert results[0].message == "Document not found"
    assert db.documents == {}


@pytest.mark.asyncio
async def test_mixed_batch_keeps_order_and_isolates_items(db, uow_factory, make_document) -> None:
    """One result per id, in input order; failures do not undo earlier successes."""
    draft = make_document()
    submitted = make_document(status=DocumentStatus.SUBMITTED)
    missing = uuid4()
    other_draft = make_document()
    use_case = SubmitDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(draft.id, submitted.id, missing, other_draft.id))

    assert [r.document_id for r in results] == [draft.id, submitted.id, missing, other_draft.id]
    assert [r.status for r in results] == [
        OperationStatus.SUCCESS,
        OperationStatus.CONFLICT,
        OperationStatus.NOT_FOUND,
        OperationStatus.SUCCESS,
    ]
    assert db.documents[draft.id].status is DocumentStatus.SUBMITTED
    assert db.documents[other_draft.id].status is DocumentStatus.SUBMITTED
    assert db.documents[submitted.id].version == 0


@pytest.mark.asyncio
async def test_duplicate_id_in_batch_second_is_conflict(db, uow_factory, make_document) -> None:
    doc = make_document()
    use_case = SubmitDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(doc.id, doc.id))

    assert [r.status for r in results] == [OperationStatus.SUCCESS, OperationStatus.CONFLICT]
    assert len(db.history[doc.id]) == 1


@pytest.mark.asyncio
async def test_empty_batch_returns_no_results(uow_factory) -> None:
    use_case = SubmitDocumentsUseCase(unit_of_work_factory=uow_factory)
    assert await use_case.execute(_batch()) == []


@pytest.mark.asyncio
async def test_version_mismatch_is_conflict(db, uow_factory, make_document, monkeypatch) -> None:
    """A write that lost the compare-and-set is reported as CONFLICT."""
    doc = make_document()
    monkeypatch.setattr(
        InMemoryDocumentRepository,
        "conditional_update_status",
        AsyncMock(return_value=UpdateOutcome.VERSION_MISMATCH),
    )
    use_case = SubmitDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(doc.id))

    assert results[0].status is OperationStatus.CONFLICT
    assert "modified concurrently" in results[0].message
    assert db.documents[doc.id].status is DocumentStatus.DRAFT
    assert doc.id not in db.history


@pytest.mark.asyncio
async def test_unexpected_error_is_conflict_and_rolled_back(
    db, uow_factory, make_document, monkeypatch
) -> None:
    """An unclassified failure after the status change rolls the item back."""
    doc = make_document()
    monkeypatch.setattr(
        InMemoryHistoryRepository,
        "append",
        AsyncMock(side_effect=RuntimeError("disk full")),
    )
    use_case = SubmitDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(doc.id))

    assert results[0].status is OperationStatus.CONFLICT
    assert results[0].message == "Error processing document: disk full"
    assert db.documents[doc.id].status is DocumentStatus.DRAFT
    assert db.documents[doc.id].version == 0


# --- ApproveDocumentsUseCase ---


@pytest.mark.asyncio
async def test_approve_submitted_document(db, uow_factory, make_document) -> None:
    """Approving writes one registry record and one APPROVE history entry."""
    doc = make_document(status=DocumentStatus.SUBMITTED)
    use_case = ApproveDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(doc.id, initiator="carol", comment="ok"))

    assert results[0].status is OperationStatus.SUCCESS
    assert results[0].message == "Document approved successfully"
    assert db.documents[doc.id].status is DocumentStatus.APPROVED
    record = db.approvals[doc.id]
    assert record.approved_by == "carol"
    assert record.comment == "ok"
    assert [h.action for h in db.history[doc.id]] == [DocumentAction.APPROVE]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [DocumentStatus.DRAFT, DocumentStatus.APPROVED])
async def test_approve_outside_submitted_is_conflict(
    db, uow_factory, make_document, status
) -> None:
    doc = make_document(status=status)
    use_case = ApproveDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(doc.id))

    assert results[0].status is OperationStatus.CONFLICT
    assert db.documents[doc.id].status is status
    assert doc.id not in db.approvals


@pytest.mark.asyncio
async def test_approve_registry_failure_leaves_document_submitted(
    db, uow_factory, make_document, monkeypatch
) -> None:
    """REGISTRY_ERROR: no status change and no history."""
    doc = make_document(status=DocumentStatus.SUBMITTED)
    monkeypatch.setattr(
        InMemoryApprovalRepository,
        "insert",
        AsyncMock(side_effect=RegistryError("registry unavailable")),
    )
    use_case = ApproveDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(doc.id))

    assert results[0].status is OperationStatus.REGISTRY_ERROR
    assert "registry unavailable" in results[0].message
    assert db.documents[doc.id].status is DocumentStatus.SUBMITTED
    assert doc.id not in db.history


@pytest.mark.asyncio
async def test_approve_with_existing_registry_record_is_registry_error(
    db, uow_factory, make_document, register_approval
) -> None:
    doc = make_document(status=DocumentStatus.SUBMITTED)
    existing = register_approval(doc)
    use_case = ApproveDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(doc.id))

    assert results[0].status is OperationStatus.REGISTRY_ERROR
    assert db.approvals[doc.id] is existing
    assert db.documents[doc.id].status is DocumentStatus.SUBMITTED


@pytest.mark.asyncio
async def test_approve_version_mismatch_removes_registry_record(
    db, uow_factory, make_document, monkeypatch
) -> None:
    """Losing the status update after the registry insert leaves no orphan record."""
    doc = make_document(status=DocumentStatus.SUBMITTED)
    monkeypatch.setattr(
        InMemoryDocumentRepository,
        "conditional_update_status",
        AsyncMock(return_value=UpdateOutcome.VERSION_MISMATCH),
    )
    use_case = ApproveDocumentsUseCase(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(doc.id))

    assert results[0].status is OperationStatus.CONFLICT
    assert doc.id not in db.approvals
    assert db.documents[doc.id].status is DocumentStatus.SUBMITTED


@pytest.mark.asyncio
async def test_submit_then_approve_full_lifecycle(db, uow_factory, make_document) -> None:
    doc = make_document()
    submit = SubmitDocumentsUseCase(unit_of_work_factory=uow_factory)
    approve = ApproveDocumentsUseCase(unit_of_work_factory=uow_factory)

    await submit.execute(_batch(doc.id, initiator="alice"))
    results = await approve.execute(_batch(doc.id, initiator="carol"))

    assert results[0].status is OperationStatus.SUCCESS
    assert db.documents[doc.id].status is DocumentStatus.APPROVED
    assert db.documents[doc.id].version == 2
    assert [h.action for h in db.history[doc.id]] == [
        DocumentAction.SUBMIT,
        DocumentAction.APPROVE,
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", list(DocumentStatus))
@pytest.mark.parametrize("use_case_cls", [SubmitDocumentsUseCase, ApproveDocumentsUseCase])
async def test_engine_follows_status_state_machine(
    uow_factory, make_document, status, use_case_cls
) -> None:
    """A transition succeeds exactly when the status allows the action's target."""
    doc = make_document(status=status)
    use_case = use_case_cls(unit_of_work_factory=uow_factory)

    results = await use_case.execute(_batch(doc.id))

    allowed = status.can_transition_to(use_case.action.target_status)
    expected = OperationStatus.SUCCESS if allowed else OperationStatus.CONFLICT
    assert results[0].status is expected

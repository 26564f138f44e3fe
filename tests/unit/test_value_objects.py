"""Unit tests for lifecycle value objects."""

from datetime import date

import pytest

from doclife.domain.value_objects import (
    DocumentAction,
    DocumentNumber,
    DocumentStatus,
    OperationStatus,
)


def test_status_moves_forward_only() -> None:
    assert DocumentStatus.DRAFT.next_status is DocumentStatus.SUBMITTED
    assert DocumentStatus.SUBMITTED.next_status is DocumentStatus.APPROVED
    assert DocumentStatus.APPROVED.next_status is None


@pytest.mark.parametrize(
    ("source", "target", "allowed"),
    [
        (DocumentStatus.DRAFT, DocumentStatus.SUBMITTED, True),
        (DocumentStatus.SUBMITTED, DocumentStatus.APPROVED, True),
        (DocumentStatus.DRAFT, DocumentStatus.APPROVED, False),
        (DocumentStatus.SUBMITTED, DocumentStatus.DRAFT, False),
        (DocumentStatus.APPROVED, DocumentStatus.SUBMITTED, False),
        (DocumentStatus.APPROVED, DocumentStatus.APPROVED, False),
    ],
)
def test_can_transition_to(source, target, allowed) -> None:
    assert source.can_transition_to(target) is allowed


def test_actions_map_to_statuses() -> None:
    assert DocumentAction.SUBMIT.source_status is DocumentStatus.DRAFT
    assert DocumentAction.SUBMIT.target_status is DocumentStatus.SUBMITTED
    assert DocumentAction.APPROVE.source_status is DocumentStatus.SUBMITTED
    assert DocumentAction.APPROVE.target_status is DocumentStatus.APPROVED


def test_enum_values_serialize_to_fixed_strings() -> None:
    assert [str(s) for s in DocumentStatus] == ["DRAFT", "SUBMITTED", "APPROVED"]
    assert [str(s) for s in OperationStatus] == [
        "SUCCESS",
        "CONFLICT",
        "NOT_FOUND",
        "REGISTRY_ERROR",
    ]


def test_document_number_format() -> None:
    number = DocumentNumber.build(date(2026, 2, 20), 1)
    assert str(number) == "DOC-20260220-000001"


def test_document_number_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        DocumentNumber("INV-20260220-000001")
    with pytest.raises(ValueError):
        DocumentNumber.build(date(2026, 2, 20), 0)

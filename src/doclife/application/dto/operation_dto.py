"""Batch transition and concurrency test DTOs."""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from doclife.domain.value_objects import OperationStatus

MAX_BATCH_SIZE = 1000


@dataclass
class BatchOperationInput:
    """Ordered ids plus who asked for the transition."""

    ids: list[UUID]
    initiator: str
    comment: str | None = None


@dataclass
class OperationResult:
    """Outcome for one id of a batch."""

    document_id: UUID
    status: OperationStatus
    message: str


@dataclass
class ConcurrencyTestInput:
    document_id: UUID
    threads: int = 10
    attempts: int = 100
    initiator: str = "concurrency-test"


@dataclass
class ConcurrencyTestResult:
    document_id: UUID
    total_attempts: int
    successful_attempts: int
    conflict_attempts: int
    error_attempts: int
    final_status: str
    registry_entries_count: int
    details: dict[str, Any] = field(default_factory=dict)

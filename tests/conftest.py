"""Pytest fixtures for DocLife tests."""

from __future__ import annotations

import itertools
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from doclife.domain.entities import ApprovalRecord, Document
from doclife.domain.value_objects import DocumentNumber, DocumentStatus
from doclife.infrastructure.persistence.memory import InMemoryDatabase, create_uow_factory


@pytest.fixture
def db() -> InMemoryDatabase:
    """Fresh in-memory database for each test."""
    return InMemoryDatabase()


@pytest.fixture
def uow_factory(db: InMemoryDatabase):
    """UoW factory bound to the test database."""
    return create_uow_factory(db)


@pytest.fixture
def make_document(db: InMemoryDatabase):
    """Insert a document directly into the database, bypassing the use cases."""
    counter = itertools.count(1)
    base = datetime(2026, 2, 20, 9, 0, tzinfo=UTC)

    def _make(
        status: DocumentStatus = DocumentStatus.DRAFT,
        author: str = "alice",
        title: str | None = None,
    ) -> Document:
        n = next(counter)
        created = base + timedelta(minutes=n)
        document = Document(
            id=uuid4(),
            document_number=str(DocumentNumber.build(created.date(), n)),
            author=author,
            title=title or f"Document {n}",
            status=status,
            created_at=created,
            updated_at=created,
            version=0,
        )
        db.documents[document.id] = document
        return document

    return _make


@pytest.fixture
def register_approval(db: InMemoryDatabase):
    """Put an approval record in the registry directly."""

    def _register(document: Document, approved_by: str = "someone-else") -> ApprovalRecord:
        now = datetime.now(UTC)
        record = ApprovalRecord(
            id=uuid4(),
            document_id=document.id,
            approved_by=approved_by,
            approved_at=now,
            created_at=now,
        )
        db.approvals[document.id] = record
        return record

    return _register

"""Fixtures for API tests."""

import falcon.asgi
import pytest
from falcon.testing import TestClient

from doclife.application.use_cases.document.create_document import CreateDocumentUseCase
from doclife.application.use_cases.document.get_document import (
    GetDocumentsBatchUseCase,
    GetDocumentUseCase,
)
from doclife.application.use_cases.document.search_documents import SearchDocumentsUseCase
from doclife.application.use_cases.transition.approve_documents import ApproveDocumentsUseCase
from doclife.application.use_cases.transition.submit_documents import SubmitDocumentsUseCase
from doclife.interfaces.api.app import create_app
from doclife.interfaces.api.resources.documents import (
    DocumentResource,
    DocumentsBatchResource,
    DocumentsResource,
)
from doclife.interfaces.api.resources.health import HealthResource
from doclife.interfaces.api.resources.transitions import TransitionResource


@pytest.fixture
def app(uow_factory) -> falcon.asgi.App:
    """Falcon ASGI app wired to the in-memory store."""
    return create_app(
        documents_resource=DocumentsResource(
            CreateDocumentUseCase(unit_of_work_factory=uow_factory),
            SearchDocumentsUseCase(unit_of_work_factory=uow_factory),
        ),
        documents_batch_resource=DocumentsBatchResource(
            GetDocumentsBatchUseCase(unit_of_work_factory=uow_factory)
        ),
        document_resource=DocumentResource(GetDocumentUseCase(unit_of_work_factory=uow_factory)),
        submit_resource=TransitionResource(SubmitDocumentsUseCase(unit_of_work_factory=uow_factory)),
        approve_resource=TransitionResource(
            ApproveDocumentsUseCase(unit_of_work_factory=uow_factory)
        ),
        health_resource=HealthResource(),
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)

"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from doclife.interfaces.api.resources.documents import (
    DocumentResource,
    DocumentsBatchResource,
    DocumentsResource,
)
from doclife.interfaces.api.resources.health import HealthResource
from doclife.interfaces.api.resources.transitions import TransitionResource

logger = logging.getLogger(__name__)


async def _handle_unexpected(req, resp, ex, params) -> None:
    logger.error(
        "Unexpected error on %s %s", req.method, req.path, exc_info=(type(ex), ex, ex.__traceback__)
    )
    resp.status = falcon.HTTP_500
    resp.media = {"error": "An unexpected error occurred"}


def create_app(
    documents_resource: DocumentsResource,
    documents_batch_resource: DocumentsBatchResource,
    document_resource: DocumentResource,
    submit_resource: TransitionResource,
    approve_resource: TransitionResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, _handle_unexpected)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/documents", documents_resource)
    app.add_route("/v1/documents/batch", documents_batch_resource)
    app.add_route("/v1/documents/submit", submit_resource)
    app.add_route("/v1/documents/approve", approve_resource)
    app.add_route("/v1/documents/{document_id}", document_resource)
    return app

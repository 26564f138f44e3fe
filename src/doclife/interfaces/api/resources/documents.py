"""Document API resources."""

from datetime import UTC, datetime
from uuid import UUID

import falcon.asgi
import pydantic

from doclife.application.dto.document_dto import (
    DocumentCreateInput,
    DocumentOutput,
    DocumentSearchCriteria,
    DocumentWithHistoryOutput,
)
from doclife.application.use_cases.document.create_document import CreateDocumentUseCase
from doclife.application.use_cases.document.get_document import (
    GetDocumentsBatchUseCase,
    GetDocumentUseCase,
)
from doclife.application.use_cases.document.search_documents import SearchDocumentsUseCase
from doclife.domain.exceptions import NotFound, ValidationError
from doclife.domain.value_objects import DocumentStatus
from doclife.interfaces.api.schemas import (
    CreateDocumentRequest,
    DocumentIdsRequest,
    validation_errors,
)


class DocumentsResource:
    """POST /v1/documents - create; GET /v1/documents - search."""

    def __init__(
        self,
        create_document: CreateDocumentUseCase,
        search_documents: SearchDocumentsUseCase,
    ) -> None:
        self._create_document = create_document
        self._search_documents = search_documents

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create a DRAFT document."""
        try:
            body = CreateDocumentRequest.model_validate(await req.get_media())
        except pydantic.ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Validation failed", "details": validation_errors(e)}
            return

        try:
            result = await self._create_document.execute(
                DocumentCreateInput(author=body.author, title=body.title)
            )
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        resp.media = _document_to_dict(result)
        resp.status = falcon.HTTP_201

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Search by status, author and date range, with offset pagination."""
        try:
            status = req.get_param("status")
            search_by = req.get_param("search_by", default="created_at")
            if search_by not in ("created_at", "updated_at"):
                raise ValueError("search_by must be created_at or updated_at")
            criteria = DocumentSearchCriteria(
                status=DocumentStatus(status.upper()) if status else None,
                author=req.get_param("author"),
                date_from=_parse_datetime(req.get_param("date_from")),
                date_to=_parse_datetime(req.get_param("date_to")),
                search_by_created_at=search_by == "created_at",
            )
            offset = req.get_param_as_int("offset", default=0)
            limit = req.get_param_as_int("limit", default=20)
            page = await self._search_documents.execute(criteria, offset=offset, limit=limit)
        except (ValueError, ValidationError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = {
            "items": [_document_to_dict(d) for d in page.items],
            "total": page.total,
            "offset": page.offset,
            "limit": page.limit,
        }
        resp.status = falcon.HTTP_200


class DocumentsBatchResource:
    """POST /v1/documents/batch - fetch several documents by id."""

    def __init__(self, get_documents_batch: GetDocumentsBatchUseCase) -> None:
        self._get_documents_batch = get_documents_batch

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = DocumentIdsRequest.model_validate(await req.get_media())
        except pydantic.ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Validation failed", "details": validation_errors(e)}
            return

        documents = await self._get_documents_batch.execute(body.ids)
        resp.media = {"items": [_document_to_dict(d) for d in documents]}
        resp.status = falcon.HTTP_200


class DocumentResource:
    """GET /v1/documents/{id} - document with its history."""

    def __init__(self, get_document: GetDocumentUseCase) -> None:
        self._get_document = get_document

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        try:
            doc_id = UUID(document_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid UUID"}
            return

        try:
            result = await self._get_document.execute(doc_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        resp.media = _document_with_history_to_dict(result)
        resp.status = falcon.HTTP_200


def _parse_datetime(raw: str | None) -> datetime | None:
    if not raw:
        return None
    parsed = datetime.fromisoformat(raw)
    # Stored timestamps are UTC-aware; a bound without an offset is read as UTC.
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _document_to_dict(d: DocumentOutput) -> dict:
    return {
        "id": str(d.id),
        "document_number": d.document_number,
        "author": d.author,
        "title": d.title,
        "status": str(d.status),
        "created_at": d.created_at.isoformat(),
        "updated_at": d.updated_at.isoformat(),
    }


def _document_with_history_to_dict(d: DocumentWithHistoryOutput) -> dict:
    return {
        "document": _document_to_dict(d.document),
        "history": [
            {
                "id": str(h.id),
                "initiator": h.initiator,
                "action": h.action,
                "comment": h.comment,
                "created_at": h.created_at.isoformat(),
            }
            for h in d.history
        ],
    }

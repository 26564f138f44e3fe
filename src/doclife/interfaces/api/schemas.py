"""Request bodies validated at the HTTP boundary."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from doclife.application.dto.operation_dto import MAX_BATCH_SIZE


class BatchOperationRequest(BaseModel):
    """Body of POST /v1/documents/submit and /v1/documents/approve."""

    model_config = ConfigDict(extra="forbid")

    ids: list[UUID] = Field(min_length=1, max_length=MAX_BATCH_SIZE)
    initiator: str = Field(min_length=2, max_length=100)
    comment: str | None = Field(default=None, max_length=2000)


class CreateDocumentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    author: str = Field(min_length=2, max_length=100)
    title: str = Field(min_length=1, max_length=255)


class DocumentIdsRequest(BaseModel):
    ids: list[UUID] = Field(min_length=1, max_length=MAX_BATCH_SIZE)


def validation_errors(exc) -> list[dict]:
    """Flatten a pydantic ValidationError into JSON-safe field/message pairs."""
    return [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]

"""Batch submit/approve API resources."""

import falcon.asgi
import pydantic

from doclife.application.dto.operation_dto import BatchOperationInput, OperationResult
from doclife.application.use_cases.transition.batch_transition import BatchTransitionUseCase
from doclife.interfaces.api.schemas import BatchOperationRequest, validation_errors


class TransitionResource:
    """POST /v1/documents/submit and /v1/documents/approve.

    Always answers 200 with one result per requested id, in request order;
    only a malformed request body gets a 400.
    """

    def __init__(self, transition: BatchTransitionUseCase) -> None:
        self._transition = transition

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = BatchOperationRequest.model_validate(await req.get_media())
        except pydantic.ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Validation failed", "details": validation_errors(e)}
            return

        results = await self._transition.execute(
            BatchOperationInput(ids=body.ids, initiator=body.initiator, comment=body.comment)
        )
        resp.media = {"results": [_result_to_dict(r) for r in results]}
        resp.status = falcon.HTTP_200


def _result_to_dict(r: OperationResult) -> dict:
    return {
        "document_id": str(r.document_id),
        "status": str(r.status),
        "message": r.message,
    }

"""History actions."""

from enum import StrEnum

from doclife.domain.value_objects.document_status import DocumentStatus


class DocumentAction(StrEnum):
    """Lifecycle action recorded in document history."""

    SUBMIT = "SUBMIT"
    APPROVE = "APPROVE"

    @property
    def source_status(self) -> DocumentStatus:
        return DocumentStatus.DRAFT if self is DocumentAction.SUBMIT else DocumentStatus.SUBMITTED

    @property
    def target_status(self) -> DocumentStatus:
        return DocumentStatus.SUBMITTED if self is DocumentAction.SUBMIT else DocumentStatus.APPROVED

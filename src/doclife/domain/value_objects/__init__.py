"""Domain value objects."""

from doclife.domain.value_objects.document_action import DocumentAction
from doclife.domain.value_objects.document_number import DocumentNumber
from doclife.domain.value_objects.document_status import DocumentStatus
from doclife.domain.value_objects.operation_status import OperationStatus
from doclife.domain.value_objects.update_outcome import UpdateOutcome

__all__ = [
    "DocumentAction",
    "DocumentNumber",
    "DocumentStatus",
    "OperationStatus",
    "UpdateOutcome",
]

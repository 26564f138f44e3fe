"""Per-item outcome of a batch operation."""

from enum import StrEnum


class OperationStatus(StrEnum):
    SUCCESS = "SUCCESS"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    REGISTRY_ERROR = "REGISTRY_ERROR"

"""Domain exceptions."""


class DocLifeError(Exception):
    """Base exception for DocLife."""

    pass


class NotFound(DocLifeError):
    """Requested resource was not found."""

    def __init__(self, resource: str, identifier: str) -> None:
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class ValidationError(DocLifeError):
    """Validation failed for input data."""

    pass


class InvalidStatusTransition(DocLifeError):
    """Document is not in the status the requested transition starts from."""

    def __init__(self, actual: str, expected: str) -> None:
        super().__init__(f"Document is in {actual} status, expected {expected}")
        self.actual = actual
        self.expected = expected


class ConcurrencyConflict(DocLifeError):
    """Document version changed between read and conditional write."""

    pass


class RegistryError(DocLifeError):
    """Approval registry rejected the insert."""

    pass


class ApprovalAlreadyExists(RegistryError):
    """An approval record already exists for the document.

    Expected under contention: it marks the losing side of an approval race,
    not a fault in the store.
    """

    pass

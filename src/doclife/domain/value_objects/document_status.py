"""Document lifecycle status."""

from enum import StrEnum


class DocumentStatus(StrEnum):
    """Lifecycle status. Moves forward only: DRAFT -> SUBMITTED -> APPROVED."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"

    @property
    def next_status(self) -> "DocumentStatus | None":
        """Status reached by the single allowed transition, None when terminal."""
        return _NEXT.get(self)

    def can_transition_to(self, target: "DocumentStatus") -> bool:
        return self.next_status is target


_NEXT: dict[DocumentStatus, DocumentStatus] = {
    DocumentStatus.DRAFT: DocumentStatus.SUBMITTED,
    DocumentStatus.SUBMITTED: DocumentStatus.APPROVED,
}

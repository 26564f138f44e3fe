"""Human-readable document number."""

from dataclasses import dataclass
from datetime import date

_PREFIX = "DOC"


@dataclass(frozen=True)
class DocumentNumber:
    """Number in the form DOC-YYYYMMDD-NNNNNN, assigned once at creation."""

    value: str

    def __post_init__(self) -> None:
        parts = self.value.split("-")
        if len(parts) != 3 or parts[0] != _PREFIX or len(parts[1]) != 8 or not parts[2].isdigit():
            raise ValueError(f"Invalid document number: {self.value!r}")

    @classmethod
    def build(cls, day: date, sequence: int) -> "DocumentNumber":
        if sequence < 1:
            raise ValueError("Sequence must be positive")
        return cls(f"{_PREFIX}-{day:%Y%m%d}-{sequence:06d}")

    def __str__(self) -> str:
        return self.value

"""Outcome of a conditional (compare-and-swap) status update."""

from enum import StrEnum


class UpdateOutcome(StrEnum):
    UPDATED = "updated"
    VERSION_MISMATCH = "version_mismatch"
    ABSENT = "absent"

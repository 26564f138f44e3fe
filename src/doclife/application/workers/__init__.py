"""Background workers."""

from doclife.application.workers.sweeper import (
    SweepReport,
    StatusSweeper,
    create_approve_sweeper,
    create_submit_sweeper,
)

__all__ = [
    "StatusSweeper",
    "SweepReport",
    "create_approve_sweeper",
    "create_submit_sweeper",
]

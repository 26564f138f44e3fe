"""In-memory persistence adapters."""

from doclife.infrastructure.persistence.memory.database import InMemoryDatabase
from doclife.infrastructure.persistence.memory.unit_of_work import (
    InMemoryUnitOfWork,
    create_uow_factory,
)

__all__ = [
    "InMemoryDatabase",
    "InMemoryUnitOfWork",
    "create_uow_factory",
]

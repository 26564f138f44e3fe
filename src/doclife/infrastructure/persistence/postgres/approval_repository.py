"""PostgreSQL approval registry implementation."""

from uuid import UUID

import psycopg
from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from doclife.domain.entities import ApprovalRecord
from doclife.domain.exceptions import ApprovalAlreadyExists, RegistryError


class PostgresApprovalRepository:
    """Approval registry; the unique index on ``document_id`` serializes racing inserts."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def insert(self, record: ApprovalRecord) -> ApprovalRecord:
        try:
            await self._conn.execute(
                "INSERT INTO approval_registry "
                "(id, document_id, approved_by, approved_at, comment, created_at) "
                "VALUES (%s, %s, %s, %s, %s, %s)",
                (
                    record.id,
                    record.document_id,
                    record.approved_by,
                    record.approved_at,
                    record.comment,
                    record.created_at,
                ),
            )
        except UniqueViolation as e:
            raise ApprovalAlreadyExists(
                f"Approval already registered for document {record.document_id}"
            ) from e
        except psycopg.Error as e:
            raise RegistryError(str(e)) from e
        return record

    async def count_for_document(self, document_id: UUID) -> int:
        cur = await self._conn.execute(
            "SELECT COUNT(*) FROM approval_registry WHERE document_id = %s", (document_id,)
        )
        return (await cur.fetchone())[0]

    async def purge_for_document(self, document_id: UUID) -> int:
        cur = await self._conn.execute(
            "DELETE FROM approval_registry WHERE document_id = %s", (document_id,)
        )
        return cur.rowcount

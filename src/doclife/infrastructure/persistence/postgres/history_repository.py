"""PostgreSQL history repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from doclife.domain.entities import HistoryEntry
from doclife.domain.value_objects import DocumentAction


class PostgresHistoryRepository:
    """History repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def append(self, entry: HistoryEntry) -> HistoryEntry:
        await self._conn.execute(
            "INSERT INTO document_history (id, document_id, initiator, action, comment, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.document_id,
                entry.initiator,
                str(entry.action),
                entry.comment,
                entry.created_at,
            ),
        )
        return entry

    async def list_by_document(self, document_id: UUID) -> list[HistoryEntry]:
        cur = await self._conn.execute(
            "SELECT id, document_id, initiator, action, comment, created_at "
            "FROM document_history WHERE document_id = %s ORDER BY created_at DESC, id",
            (document_id,),
        )
        rows = await cur.fetchall()
        return [
            HistoryEntry(
                id=r[0],
                document_id=r[1],
                initiator=r[2],
                action=DocumentAction(r[3]),
                comment=r[4],
                created_at=r[5],
            )
            for r in rows
        ]

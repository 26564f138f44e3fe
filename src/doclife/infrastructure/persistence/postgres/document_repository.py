"""PostgreSQL document repository implementation."""

from datetime import UTC, datetime
from uuid import UUID

from psycopg import AsyncConnection

from doclife.application.dto.document_dto import DocumentSearchCriteria
from doclife.domain.entities import Document
from doclife.domain.value_objects import DocumentStatus, UpdateOutcome

_COLUMNS = "id, document_number, author, title, status, created_at, updated_at, version"


def _row_to_document(r: tuple) -> Document:
    return Document(
        id=r[0],
        document_number=r[1],
        author=r[2],
        title=r[3],
        status=DocumentStatus(r[4]),
        created_at=r[5],
        updated_at=r[6],
        version=r[7],
    )


class PostgresDocumentRepository:
    """Document repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, document_id: UUID) -> Document | None:
        """Get document by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document WHERE id = %s", (document_id,)
        )
        r = await cur.fetchone()
        return _row_to_document(r) if r else None

    async def get_many(self, document_ids: list[UUID]) -> list[Document]:
        """Get documents by ids; unknown ids are skipped."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document WHERE id = ANY(%s)", (list(document_ids),)
        )
        return [_row_to_document(r) for r in await cur.fetchall()]

    async def create(self, document: Document) -> Document:
        """Create document."""
        await self._conn.execute(
            f"INSERT INTO document ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                document.id,
                document.document_number,
                document.author,
                document.title,
                str(document.status),
                document.created_at,
                document.updated_at,
                document.version,
            ),
        )
        return document

    async def next_number_sequence(self) -> int:
        cur = await self._conn.execute("SELECT nextval('document_number_seq')")
        r = await cur.fetchone()
        return int(r[0])

    async def conditional_update_status(
        self,
        document_id: UUID,
        expected_version: int,
        new_status: DocumentStatus,
        updated_at: datetime,
    ) -> UpdateOutcome:
        """Set status only if the row still carries ``expected_version``."""
        cur = await self._conn.execute(
            "UPDATE document SET status = %s, updated_at = %s, version = version + 1 "
            "WHERE id = %s AND version = %s",
            (str(new_status), updated_at, document_id, expected_version),
        )
        if cur.rowcount == 1:
            return UpdateOutcome.UPDATED
        cur = await self._conn.execute("SELECT 1 FROM document WHERE id = %s", (document_id,))
        if await cur.fetchone():
            return UpdateOutcome.VERSION_MISMATCH
        return UpdateOutcome.ABSENT

    async def list_by_status(
        self, status: DocumentStatus, *, offset: int = 0, limit: int = 100
    ) -> list[Document]:
        """Page of documents in ``status``, oldest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document WHERE status = %s "
            "ORDER BY created_at, id LIMIT %s OFFSET %s",
            (str(status), limit, offset),
        )
        return [_row_to_document(r) for r in await cur.fetchall()]

    async def search(
        self, criteria: DocumentSearchCriteria, *, offset: int = 0, limit: int = 20
    ) -> tuple[list[Document], int]:
        """Filtered page plus total match count."""
        date_column = "created_at" if criteria.search_by_created_at else "updated_at"
        conditions = []
        params: list[object] = []
        if criteria.status is not None:
            conditions.append("status = %s")
            params.append(str(criteria.status))
        if criteria.author is not None:
            conditions.append("author = %s")
            params.append(criteria.author)
        if criteria.date_from is not None:
            conditions.append(f"{date_column} >= %s")
            params.append(criteria.date_from)
        if criteria.date_to is not None:
            conditions.append(f"{date_column} <= %s")
            params.append(criteria.date_to)
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""

        cur = await self._conn.execute(f"SELECT COUNT(*) FROM document{where}", tuple(params))
        total = (await cur.fetchone())[0]
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document{where} ORDER BY created_at, id LIMIT %s OFFSET %s",
            tuple(params) + (limit, offset),
        )
        return [_row_to_document(r) for r in await cur.fetchall()], total

    async def force_status(self, document_id: UUID, status: DocumentStatus) -> None:
        """Overwrite status without a version check. Test tooling only."""
        await self._conn.execute(
            "UPDATE document SET status = %s, updated_at = %s, version = version + 1 "
            "WHERE id = %s",
            (str(status), datetime.now(UTC), document_id),
        )

"""Lifecycle schema - document, document_history, approval_registry.

Revision ID: 001
Revises:
Create Date: 2026-02-20

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.execute("CREATE SEQUENCE IF NOT EXISTS document_number_seq START 1")

    op.create_table(
        "document",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("document_number", sa.String(50), nullable=False),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("version", sa.BigInteger(), nullable=False, server_default="0"),
        sa.CheckConstraint(
            "status IN ('DRAFT', 'SUBMITTED', 'APPROVED')", name="ck_document_status"
        ),
    )
    op.create_index("ix_document_number", "document", ["document_number"], unique=True)
    op.create_index("ix_document_status_created", "document", ["status", "created_at", "id"])
    op.create_index("ix_document_author", "document", ["author"])
    op.create_index("ix_document_created_at", "document", ["created_at"])
    op.create_index("ix_document_updated_at", "document", ["updated_at"])

    op.create_table(
        "document_history",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "document_id",
            sa.UUID(),
            sa.ForeignKey("document.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("initiator", sa.String(100), nullable=False),
        sa.Column("action", sa.String(20), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_document_history_document_id", "document_history", ["document_id"])

    op.create_table(
        "approval_registry",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "document_id",
            sa.UUID(),
            sa.ForeignKey("document.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("approved_by", sa.String(100), nullable=False),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    # One approval per document: concurrent approvers race on this index.
    op.create_index(
        "ux_approval_registry_document_id", "approval_registry", ["document_id"], unique=True
    )


def downgrade() -> None:
    op.drop_table("approval_registry")
    op.drop_table("document_history")
    op.drop_table("document")
    op.execute("DROP SEQUENCE IF EXISTS document_number_seq")

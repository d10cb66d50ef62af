"""Initial schema - document table for the hierarchical document store.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # collection_path is the full collection path, e.g. challenges/anatomy/challengeItems
    op.create_table(
        "document",
        sa.Column("collection_path", sa.Text(), primary_key=True),
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("data", postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    # subcollection discovery uses LIKE 'prefix/%'
    op.create_index(
        "ix_document_collection_path",
        "document",
        ["collection_path"],
        postgresql_ops={"collection_path": "text_pattern_ops"},
    )


def downgrade() -> None:
    op.drop_index("ix_document_collection_path", table_name="document")
    op.drop_table("document")

"""Create snippets table

Revision ID: 001
Revises: None
Create Date: 2024-03-01 00:00:00.000000+00:00

What:  Creates the `snippets` table.
How:   Portable column types only (INTEGER identity key, TIMESTAMP WITH TIME
       ZONE), so the same migration runs on PostgreSQL and SQLite.

Rollback: downgrade() drops the table (destructive — all snippets lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "snippets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            comment="When this snippet was created (UTC)",
        ),
        sa.Column(
            "expires",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            comment="Snippet is hidden from every read once this time has passed (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_snippets_created", "snippets", ["created"])


def downgrade() -> None:
    op.drop_index("idx_snippets_created", table_name="snippets")
    op.drop_table("snippets")

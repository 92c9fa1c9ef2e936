"""
Snippetbox — Snippet SQLAlchemy Model
=======================================

What:  ORM model representing the `snippets` table.
Why:   Maps Python objects to database rows; Alembic reads it for migrations
       and the test suite creates the table from its metadata.
Who:   Used by SnippetStore for inserts and reads.

Table Design:
    - Integer primary key: assigned by the database, monotonically increasing,
      so ORDER BY id DESC doubles as "most recent first"
    - created / expires: UTC, timezone-aware. Both are computed by the store
      at insert time so that expires - created is exactly the chosen day count
    - Rows are never updated or deleted. Expiry is a read-time filter
      (WHERE expires > now), not a cleanup job
"""

from datetime import datetime

from sqlalchemy import TIMESTAMP, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from snippetbox.database import Base


class Snippet(Base):
    """A short piece of text that stays visible until it expires."""

    __tablename__ = "snippets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Handlers cap titles at 100 characters before they reach the store
    title: Mapped[str] = mapped_column(String(100), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        comment="When this snippet was created (UTC)",
    )

    expires: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        comment="Snippet is hidden from every read once this time has passed (UTC)",
    )

    __table_args__ = (
        Index("idx_snippets_created", "created"),
    )

    def __repr__(self) -> str:
        return f"<Snippet(id={self.id}, title='{self.title}', expires='{self.expires}')>"

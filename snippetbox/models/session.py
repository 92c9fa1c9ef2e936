"""
Snippetbox — Session SQLAlchemy Model
=======================================

What:  ORM model for the `sessions` table that backs server-side sessions.
Who:   Read and written only by DatabaseSessionStore; nothing else in the
       application touches this table.

Table Design:
    - token:  the opaque session id, which is the only thing the browser's
              cookie carries
    - data:   the serialized session dictionary (currently just the flash)
    - expiry: rows past this time are ignored on read and purged periodically
"""

from datetime import datetime

from sqlalchemy import TIMESTAMP, Index, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from snippetbox.database import Base


class SessionRecord(Base):
    __tablename__ = "sessions"

    token: Mapped[str] = mapped_column(String(64), primary_key=True)

    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    expiry: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_sessions_expiry", "expiry"),
    )

    def __repr__(self) -> str:
        return f"<SessionRecord(token='{self.token[:8]}…', expiry='{self.expiry}')>"

"""
Snippetbox — Server-Side Session Store
========================================

What:  A starsessions SessionStore that keeps session data in the `sessions`
       table of the application database.
Why:   The browser only ever holds an opaque session token. The flash message
       (and anything else put in request.session) stays on the server.
How:   starsessions' SessionMiddleware owns the cookie and serialization and
       calls read/write/remove with raw bytes; this class maps those calls to
       SQL. Each call uses its own short-lived AsyncSession from the factory,
       independent of the per-request session the handlers use.

Expiry:
    write() stores `now + ttl` (the middleware's remaining lifetime). read()
    and exists() ignore rows past their expiry. purge_expired() deletes them
    and is run periodically by run_session_cleanup() while the app is up.
"""

import asyncio
import logging
from datetime import timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starsessions import SessionStore

from snippetbox.exceptions import StorageError
from snippetbox.models.session import SessionRecord
from snippetbox.services.snippet_store import Clock, utc_now

logger = logging.getLogger(__name__)


class DatabaseSessionStore(SessionStore):
    """
    Session persistence backed by SQLAlchemy.

    Responsibilities:
        - read():   Session bytes for a live token, b"" otherwise
        - write():  Insert or replace a token's data and expiry
        - remove(): Delete a token (called when the session becomes empty)
        - exists(): Whether a live row exists for the token
        - purge_expired(): Delete every expired row
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Clock = utc_now,
    ):
        self.session_factory = session_factory
        self.clock = clock

    async def read(self, session_id: str, lifetime: int) -> bytes:
        try:
            async with self.session_factory() as db:
                result = await db.execute(
                    select(SessionRecord.data).where(
                        SessionRecord.token == session_id,
                        SessionRecord.expiry > self.clock(),
                    )
                )
                data = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error reading session: %s", str(e))
            raise StorageError(
                message="Could not load the session.",
                context={"error_type": type(e).__name__},
            ) from e

        return data or b""

    async def write(self, session_id: str, data: bytes, lifetime: int, ttl: int) -> str:
        # ttl is 0 for browser-session cookies; fall back to the full lifetime
        expiry = self.clock() + timedelta(seconds=ttl or lifetime)
        try:
            async with self.session_factory() as db:
                record = await db.get(SessionRecord, session_id)
                if record is None:
                    db.add(SessionRecord(token=session_id, data=data, expiry=expiry))
                else:
                    record.data = data
                    record.expiry = expiry
                await db.commit()
        except Exception as e:
            logger.error("Database error writing session: %s", str(e))
            raise StorageError(
                message="Could not save the session.",
                context={"error_type": type(e).__name__},
            ) from e

        return session_id

    async def remove(self, session_id: str) -> None:
        try:
            async with self.session_factory() as db:
                await db.execute(delete(SessionRecord).where(SessionRecord.token == session_id))
                await db.commit()
        except Exception as e:
            logger.error("Database error removing session: %s", str(e))
            raise StorageError(
                message="Could not remove the session.",
                context={"error_type": type(e).__name__},
            ) from e

    async def exists(self, session_id: str) -> bool:
        return await self.read(session_id, lifetime=0) != b""

    async def purge_expired(self) -> int:
        """Delete expired rows. Returns how many were removed."""
        async with self.session_factory() as db:
            result = await db.execute(
                delete(SessionRecord).where(SessionRecord.expiry <= self.clock())
            )
            await db.commit()
        return result.rowcount or 0


async def run_session_cleanup(store: DatabaseSessionStore, interval: float) -> None:
    """
    Purge expired sessions every `interval` seconds until cancelled.

    A failed purge is logged and retried on the next tick.
    """
    while True:
        await asyncio.sleep(interval)
        try:
            removed = await store.purge_expired()
        except Exception as e:
            logger.warning("Session cleanup failed: %s", str(e))
            continue
        if removed:
            logger.debug("Purged %d expired session(s)", removed)

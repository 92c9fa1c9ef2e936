"""
Snippetbox — Snippet Store
============================

What:  All SQL against the `snippets` table: insert, get, latest.
Why:   Keeps queries out of the route handlers and gives them exactly two
       failure modes to deal with: NotFoundError and StorageError.
How:   Wraps an injected AsyncSession (one per request, from
       get_db_session) and an injectable clock.
Who:   Constructed per request by the get_snippet_store dependency.

Expiry:
    Expired rows stay in the table. Every read adds `expires > now` to its
    WHERE clause, so a snippet disappears from get() and latest() the moment
    its expiry passes. `now` comes from the clock, never from the database,
    which keeps the insert-time and read-time notion of "now" consistent and
    lets tests move time forward.

Error Handling:
    Every failure that is not "no such live row" is logged with its details
    and re-raised as StorageError. There are no retries.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.exceptions import NotFoundError, StorageError
from snippetbox.models.snippet import Snippet
from snippetbox.schemas.snippet import SnippetRead

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SnippetStore:
    """
    Data access for snippets.

    Responsibilities:
        - insert(): Persist a new snippet and return its id
        - get():    Fetch one live snippet by id
        - latest(): The 10 most recent live snippets, newest first

    The store performs no input validation: titles, content and the expiry
    day count are checked by the handler before insert() is reached.
    """

    # No pagination: the home page shows a fixed number of snippets
    LATEST_LIMIT = 10

    def __init__(self, session: AsyncSession, clock: Clock = utc_now):
        self.session = session
        self.clock = clock

    async def insert(self, title: str, content: str, expires: int) -> int:
        """
        Insert a new snippet that expires `expires` days from now.

        Each insert is committed immediately, so the snippet is readable by
        the time the client follows the redirect to it.

        Returns:
            The id assigned by the database.

        Raises:
            StorageError: The write failed for any reason.
        """
        created = self.clock()
        snippet = Snippet(
            title=title,
            content=content,
            created=created,
            expires=created + timedelta(days=expires),
        )
        try:
            self.session.add(snippet)
            await self.session.flush()
            snippet_id = snippet.id
            await self.session.commit()
        except Exception as e:
            logger.error("Database error inserting snippet: %s", str(e), exc_info=True)
            try:
                await self.session.rollback()
            except Exception as rollback_error:
                # The StorageError below is the failure that matters
                logger.warning("Rollback after failed insert also failed: %s", str(rollback_error))
            raise StorageError(
                message="Could not save the snippet. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Snippet %d created, expires in %d day(s)", snippet_id, expires)
        return snippet_id

    async def get(self, snippet_id: int) -> SnippetRead:
        """
        Retrieve a single live snippet.

        Query plan:
            SELECT id, title, content, created, expires FROM snippets
            WHERE expires > :now AND id = :id

        Raises:
            NotFoundError: No snippet with this id, or it has expired
            StorageError:  Query execution or row conversion failed
        """
        try:
            result = await self.session.execute(
                select(Snippet).where(
                    Snippet.expires > self.clock(),
                    Snippet.id == snippet_id,
                )
            )
            snippet = result.scalar_one_or_none()

            if snippet is None:
                raise NotFoundError(resource="snippet", resource_id=str(snippet_id))

            return SnippetRead.model_validate(snippet)

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error fetching snippet %s: %s", snippet_id, str(e))
            raise StorageError(
                message="Could not retrieve the snippet. Please try again.",
                context={"snippet_id": snippet_id, "error_type": type(e).__name__},
            ) from e

    async def latest(self) -> List[SnippetRead]:
        """
        Return up to LATEST_LIMIT live snippets, highest id first.

        The whole result set is converted before returning. If anything
        fails part-way, nothing is returned and StorageError is raised.

        Returns:
            A list, empty when no snippet is live.
        """
        try:
            result = await self.session.execute(
                select(Snippet)
                .where(Snippet.expires > self.clock())
                .order_by(desc(Snippet.id))
                .limit(self.LATEST_LIMIT)
            )
            return [SnippetRead.model_validate(row) for row in result.scalars()]

        except Exception as e:
            logger.error("Database error listing snippets: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not retrieve snippets. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

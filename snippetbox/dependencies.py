"""
Snippetbox — FastAPI Dependencies
===================================

What:  Builds the per-request objects handlers depend on.
Why:   Handlers declare what they need (`store: SnippetStore = Depends(...)`)
       instead of reaching for module-level singletons, and tests replace
       any of them through app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.database import get_db_session
from snippetbox.services.snippet_store import SnippetStore


async def get_snippet_store(db: AsyncSession = Depends(get_db_session)) -> SnippetStore:
    """A SnippetStore bound to this request's database session."""
    return SnippetStore(db)

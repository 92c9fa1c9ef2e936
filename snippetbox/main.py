"""
Snippetbox — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, exception handlers, route
       mounting and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn snippetbox.main:app) or `python -m snippetbox`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌─────────────────────┐  │
    │  │  Req ID  │→│ Logging  │→│ Session (server-side)│ │
    │  └──────────┘ └──────────┘ └─────────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  GET /   GET /snippet/view/{id}   GET|POST          │
    │  /snippet/create   GET /health   /static/*          │
    │                                                     │
    │  Exception Handlers (plain-text bodies):            │
    │  ClientDecode→400 │ NotFound→404 │ Storage→500      │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, check configuration, start the expired-session
              cleanup task, log the listen address
    Shutdown: stop the cleanup task, dispose the database engine
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starsessions import SessionAutoloadMiddleware, SessionMiddleware, SessionStore

from snippetbox import __version__
from snippetbox.config import settings
from snippetbox.database import async_session_factory, dispose_engine
from snippetbox.exceptions import ClientDecodeError, NotFoundError, StorageError
from snippetbox.middleware.logging import RequestLoggingMiddleware
from snippetbox.middleware.request_id import RequestIDMiddleware, request_id_var
from snippetbox.routes import health, snippets
from snippetbox.services.session_store import DatabaseSessionStore, run_session_cleanup
from snippetbox.templating import UI_ROOT

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Snippetbox %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Still serve: the development defaults work, they just aren't secure
        logger.warning("Configuration warning: %s", str(e))

    cleanup_task = None
    session_store = app.state.session_store
    if isinstance(session_store, DatabaseSessionStore):
        cleanup_task = asyncio.create_task(
            run_session_cleanup(session_store, settings.session_cleanup_interval)
        )

    logger.info("Starting server on %s:%d", settings.host, settings.port)

    yield

    logger.info("Snippetbox shutting down...")
    if cleanup_task is not None:
        cleanup_task.cancel()
        try:
            await cleanup_task
        except asyncio.CancelledError:
            pass
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def status_text(status_code: int) -> PlainTextResponse:
    """A plain-text response whose body is just the HTTP reason phrase."""
    return PlainTextResponse(HTTPStatus(status_code).phrase, status_code=status_code)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler table:
        ClientDecodeError      → 400 Bad Request
        NotFoundError          → 404 Not Found
        StorageError           → 500 Internal Server Error
        HTTPException          → its own status (unknown route, wrong method)
        Exception (fallback)   → 500 Internal Server Error

    Response bodies never contain internal details; those are logged.
    """

    @app.exception_handler(ClientDecodeError)
    async def handle_client_decode_error(request: Request, exc: ClientDecodeError):
        rid = request_id_var.get("")
        logger.warning("[%s] Form decode error: %s | Context: %s", rid, exc.message, exc.context)
        return status_text(400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return status_text(404)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return status_text(500)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        response = status_text(exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return status_text(500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(session_store: Optional[SessionStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        session_store: Where session data is kept. Defaults to the `sessions`
                       table of the application database.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Snippetbox",
        description="Create and share short text snippets that expire.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.session_store = session_store or DatabaseSessionStore(async_session_factory)

    # Middleware executes in REVERSE order of addition: RequestID runs first,
    # then logging, then the session cookie, then session loading
    app.add_middleware(SessionAutoloadMiddleware)
    app.add_middleware(
        SessionMiddleware,
        store=app.state.session_store,
        lifetime=settings.session_lifetime,
        cookie_name=settings.session_cookie_name,
        cookie_same_site="lax",
        cookie_https_only=settings.session_cookie_secure,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(snippets.router)
    app.include_router(health.router)

    app.mount(
        "/static",
        StaticFiles(directory=settings.static_dir or str(UI_ROOT / "static")),
        name="static",
    )

    return app


# uvicorn expects `snippetbox.main:app` to be importable
app = create_app()

"""
Snippetbox Migration Environment
==================================

What:  Runs the snippetbox migrations (snippets table, sessions table)
       against DATABASE_URL.
How:   The URL comes from snippetbox.config.settings rather than alembic.ini,
       so `alembic upgrade head` and the server always target the same
       database. Online migrations go through an async engine with NullPool;
       offline mode prints the SQL instead.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from snippetbox.config import settings
from snippetbox.database import Base

# Every table snippetbox owns must be registered on Base.metadata
from snippetbox.models.session import SessionRecord  # noqa: F401
from snippetbox.models.snippet import Snippet  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

config.set_main_option("sqlalchemy.url", settings.database_url)


def run_migrations_offline() -> None:
    """`alembic upgrade head --sql`: print the snippetbox DDL for review."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def apply_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply pending revisions on a throwaway async engine, then dispose it."""
    migration_engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with migration_engine.connect() as connection:
        await connection.run_sync(apply_migrations)

    await migration_engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())

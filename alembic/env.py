"""Alembic environment — runs invoice migrations on the dashboard's own engine URL.

Design Decisions:
    - URL resolution goes through invoice_dashboard.config.Settings, so DATABASE_URL
      gets the same postgresql:// → postgresql+asyncpg:// rewrite the app uses
    - alembic.ini's sqlalchemy.url is only used when DATABASE_URL is unset
    - SQLite URLs (local/test databases) migrate in batch mode for ALTER support
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from invoice_dashboard.config import Settings
from invoice_dashboard.db.base import Base
import invoice_dashboard.models  # noqa: F401  registers invoices on Base.metadata

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def migration_url() -> str:
    if os.environ.get("DATABASE_URL"):
        return Settings().database_url
    return config.get_main_option("sqlalchemy.url")


def run_offline() -> None:
    url = migration_url()
    context.configure(
        url=url,
        target_metadata=Base.metadata,
        render_as_batch=url.startswith("sqlite"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=Base.metadata,
        render_as_batch=connection.dialect.name == "sqlite",
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    engine = create_async_engine(migration_url(), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())

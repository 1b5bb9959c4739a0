"""Alembic environment configuration for async SQLAlchemy."""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

from procurement.config import Settings
from procurement.database import Base

# Import all models so Base.metadata knows about them
import procurement.auth.models  # noqa: F401
import procurement.corporations.models  # noqa: F401
import procurement.charges.models  # noqa: F401
import procurement.sales_taxes.models  # noqa: F401
import procurement.uom.models  # noqa: F401
import procurement.freight.models  # noqa: F401
import procurement.po_instructions.models  # noqa: F401
import procurement.terms.models  # noqa: F401
import procurement.service_types.models  # noqa: F401
import procurement.locations.models  # noqa: F401
import procurement.projects.models  # noqa: F401
import procurement.cost_codes.models  # noqa: F401
import procurement.audit.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# database_url comes from the environment or .env
settings = Settings()


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (generates SQL without connecting)."""
    context.configure(
        url=settings.database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations in 'online' mode with an async engine."""
    connectable = create_async_engine(settings.database_url, poolclass=pool.NullPool)
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

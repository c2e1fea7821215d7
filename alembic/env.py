import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from core.config import settings
from models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Catalog tables plus the seed_runs audit table
target_metadata = Base.metadata

# An -x url=... argument overrides DATABASE_URL (used against scratch databases)
database_url = context.get_x_argument(as_dictionary=True).get("url", settings.DATABASE_URL)

migration_options = {
    "target_metadata": target_metadata,
    "compare_type": True,
    "compare_server_default": True,
    "version_table": "pokedex_schema_version",
}


def run_migrations_offline():
    """Emit SQL to stdout instead of connecting"""
    context.configure(url=database_url, literal_binds=True, **migration_options)

    with context.begin_transaction():
        context.run_migrations()


def apply_migrations(connection):
    context.configure(connection=connection, **migration_options)

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online():
    engine = create_async_engine(database_url, poolclass=pool.NullPool)

    async with engine.connect() as connection:
        await connection.run_sync(apply_migrations)

    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())

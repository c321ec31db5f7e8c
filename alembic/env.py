"""Alembic environment configuration."""

import sys
from pathlib import Path
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

# Add the parent directory to Python path so we can import ojt_tracker
sys.path.insert(0, str(Path(__file__).parent.parent))

from ojt_tracker.config import settings
from ojt_tracker.db.base import Base

# Import all models to ensure they are registered
from ojt_tracker.models import entry, supervisor, user  # noqa

# Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Target metadata
target_metadata = Base.metadata


def sync_database_url(database_url: str) -> str:
    """Driver URL for synchronous migrations (asyncpg -> psycopg2, aiosqlite -> sqlite)."""
    if database_url.startswith("postgresql+asyncpg://"):
        database_url = database_url.replace("postgresql+asyncpg://", "postgresql://")
        # asyncpg uses 'ssl=false/true/require', psycopg2 uses 'sslmode=disable/require'
        for sep in ("?", "&"):
            database_url = database_url.replace(f"{sep}ssl=false", f"{sep}sslmode=disable")
            database_url = database_url.replace(f"{sep}ssl=true", f"{sep}sslmode=require")
            database_url = database_url.replace(f"{sep}ssl=require", f"{sep}sslmode=require")
    elif database_url.startswith("sqlite+aiosqlite://"):
        database_url = database_url.replace("sqlite+aiosqlite://", "sqlite://")
    return database_url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=sync_database_url(str(settings.DATABASE_URL)),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    config.set_main_option("sqlalchemy.url", sync_database_url(str(settings.DATABASE_URL)))

    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

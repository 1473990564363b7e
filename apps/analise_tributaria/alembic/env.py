"""Alembic environment wired to the application settings and ORM metadata."""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from analise_tributaria.core.settings import get_settings
from analise_tributaria.db.base import Base, import_orm_models

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

import_orm_models()
target_metadata = Base.metadata

# DATABASE_URL from the process environment overrides .env and defaults.
database_url = os.getenv("DATABASE_URL") or get_settings().database_url


def _configure(**kwargs: object) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=database_url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(database_url, poolclass=pool.NullPool)
    with engine.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

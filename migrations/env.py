"""Alembic environment for the Avatar Arena schema.

The target URL comes from ``ALEMBIC_URL``, then ``sqlalchemy.url`` in
``alembic.ini``, then ``DATABASE_URL`` (converted to a sync driver). Demo mode
has no schema, so running migrations without any of them is an error.
"""
from __future__ import annotations

import os
import sys
from logging.config import fileConfig
from pathlib import Path
from typing import Any

from alembic import context
from sqlalchemy import engine_from_config, pool

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from avatar_arena.core.settings import settings  # noqa: E402
from avatar_arena.db.session import Base  # noqa: E402

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def resolve_url() -> str:
    url = os.getenv("ALEMBIC_URL") or config.get_main_option("sqlalchemy.url") or settings.database_url_sync
    if not url:
        raise RuntimeError("Set DATABASE_URL or ALEMBIC_URL before running migrations")
    return url


def configure_options(url: str) -> dict[str, Any]:
    """Options shared by offline and online runs.

    SQLite cannot ALTER most constraints in place, so its migrations run in
    batch mode.
    """
    return {
        "target_metadata": Base.metadata,
        "compare_type": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline(url: str) -> None:
    """Emit SQL for the migrations without connecting."""
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **configure_options(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: str) -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = url
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, **configure_options(url))
        with context.begin_transaction():
            context.run_migrations()


target_url = resolve_url()
if context.is_offline_mode():
    run_migrations_offline(target_url)
else:
    run_migrations_online(target_url)

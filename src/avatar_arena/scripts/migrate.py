# src/avatar_arena/scripts/migrate.py
from __future__ import annotations

import os

from alembic import command
from alembic.config import Config

from avatar_arena.core.settings import settings

MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")


def build_config() -> Config:
    """Return an Alembic config pointed at the project's migrations folder."""
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    if settings.database_url_sync:
        cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    cfg.set_main_option("script_location", os.path.abspath(MIGRATIONS_DIR))
    return cfg


def run_upgrade_head() -> None:
    if settings.demo_mode:
        raise SystemExit("DATABASE_URL is not set; nothing to migrate in demo mode")
    command.upgrade(build_config(), "head")


if __name__ == "__main__":
    run_upgrade_head()

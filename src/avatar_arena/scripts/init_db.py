# src/avatar_arena/scripts/init_db.py
"""Create all tables directly from the ORM metadata, bypassing Alembic."""

from __future__ import annotations

import argparse

from avatar_arena.core.settings import settings
from avatar_arena.db.session import Database


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--database-url", default=settings.database_url_sync)
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    args = parser.parse_args(argv)

    if not args.database_url:
        parser.error("DATABASE_URL is not set and --database-url was not given")

    database = Database(args.database_url)
    try:
        if args.drop:
            database.drop_tables()
        database.create_tables()
    finally:
        database.dispose()
    print("Database initialized.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

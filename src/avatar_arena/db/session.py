"""Database engine and session lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import avatar_arena.models  # noqa: E402,F401


class Database:
    """Owns one engine and its session factory for the life of the process.

    Created by the application lifespan and disposed on shutdown; request
    handlers receive sessions through :func:`get_db` rather than reaching for
    a module-level engine.
    """

    def __init__(self, url: str, *, echo: bool = False, engine: Engine | None = None) -> None:
        if engine is None:
            connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
            engine = create_engine(url, pool_pre_ping=True, echo=echo, connect_args=connect_args)
        self.engine = engine
        self.session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    def session(self) -> Session:
        """Open a new session bound to this database."""
        return self.session_factory()

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables."""
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        logger.debug("Disposing database engine")
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session | None, None, None]:
    """Yield a database session, or None when the app runs in demo mode."""
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        yield None
        return

    db = database.session()
    try:
        yield db
    finally:
        db.close()

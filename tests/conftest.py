# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from avatar_arena.api.v1.dependencies import get_aggregation_mode, get_heygen_client
from avatar_arena.core.settings import Settings
from avatar_arena.db.session import Base
from avatar_arena.db.session import get_db as app_get_session
from avatar_arena.db.time import utcnow
from avatar_arena.main import create_app
from avatar_arena.models import Avatar, Vote
from avatar_arena.services import AggregationMode

TEST_DB_URL = "sqlite://"

_DEVICE_COUNTER = count(1)
_TEST_SETTINGS_INSTANCE = Settings(
    _env_file=None,
    DATABASE_URL=None,
    LEADERBOARD_AGGREGATION="auto",
    OPENAI_API_KEY=None,
)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance isolated from the developer's environment."""
    return _TEST_SETTINGS_INSTANCE


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def demo_mode(app: FastAPI, override_session_dependency: None) -> Iterator[None]:
    """Serve requests as if no database were configured."""

    def _no_session() -> Generator[None, None, None]:
        yield None

    app.dependency_overrides[app_get_session] = _no_session
    yield


@pytest.fixture()
def fallback_mode(app: FastAPI) -> Iterator[None]:
    """Force the two-step leaderboard path."""
    app.dependency_overrides[get_aggregation_mode] = lambda: AggregationMode.FALLBACK
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_aggregation_mode, None)


@pytest.fixture()
def mock_heygen(app: FastAPI, mocker: Any) -> Iterator[Any]:
    """Replace the video-generation client with an AsyncMock."""
    from avatar_arena.services.heygen import HeyGenClient, HeyGenVideo

    heygen = mocker.AsyncMock(spec=HeyGenClient)
    heygen.generate_video.return_value = HeyGenVideo(
        video_url="https://cdn.example.com/videos/abc.mp4",
        thumbnail_url="https://cdn.example.com/thumbs/abc.jpg",
        video_id="vid_abc",
        status="processing",
        job_id="job_abc",
    )
    app.dependency_overrides[get_heygen_client] = lambda: heygen
    try:
        yield heygen
    finally:
        app.dependency_overrides.pop(get_heygen_client, None)


@pytest.fixture()
def make_avatar(db_session: Session) -> Callable[..., Avatar]:
    """Return a factory that persists avatars.

    Avatars get strictly increasing ``created_at`` values so that recency
    ordering is deterministic.
    """
    base_time = utcnow() - timedelta(days=1)
    counter = count()

    def _make(persona_tag: str = "hacker", created_at: datetime | None = None, **fields: Any) -> Avatar:
        step = next(counter)
        avatar = Avatar(
            image_url=fields.pop("image_url", f"https://img.example.com/{step}.jpg"),
            voice_type=fields.pop("voice_type", "male_confident"),
            script=fields.pop("script", f"Avatar script {step}"),
            persona_tag=persona_tag,
            created_at=created_at or base_time + timedelta(minutes=step),
            **fields,
        )
        db_session.add(avatar)
        db_session.commit()
        db_session.refresh(avatar)
        return avatar

    return _make


@pytest.fixture()
def add_votes(db_session: Session) -> Callable[..., None]:
    """Return a helper that records ``up`` and ``down`` votes from fresh devices."""

    def _add(avatar: Avatar, up: int = 0, down: int = 0) -> None:
        for vote_type, n in (("up", up), ("down", down)):
            for _ in range(n):
                db_session.add(
                    Vote(
                        avatar_id=avatar.id,
                        device_id=f"device-{next(_DEVICE_COUNTER)}",
                        vote_type=vote_type,
                    )
                )
        db_session.commit()

    return _add


@pytest.fixture()
def device_id() -> str:
    return f"device-{next(_DEVICE_COUNTER)}"

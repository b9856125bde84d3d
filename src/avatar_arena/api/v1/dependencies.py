"""Shared API dependencies wiring request state into services."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from avatar_arena.core.settings import Settings
from avatar_arena.db.session import get_db
from avatar_arena.services import (
    AggregationMode,
    AvatarService,
    DemoStore,
    HeyGenClient,
    LeaderboardService,
    ScriptGenerator,
    SubmissionService,
    VoteService,
)

# Type alias for database session dependency; None in demo mode.
SessionDep = Annotated[Session | None, Depends(get_db)]


def get_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_demo_store(request: Request) -> DemoStore:
    """Return the process-wide demo store."""
    return request.app.state.demo_store


def get_heygen_client(request: Request) -> HeyGenClient:
    """Return the video-generation client opened at startup."""
    return request.app.state.heygen_client


def get_aggregation_mode(request: Request) -> AggregationMode:
    """Return the leaderboard path selected at startup."""
    return request.app.state.aggregation_mode


SettingsDep = Annotated[Settings, Depends(get_settings)]
DemoStoreDep = Annotated[DemoStore, Depends(get_demo_store)]


def get_avatar_service(db: SessionDep, demo_store: DemoStoreDep) -> AvatarService:
    return AvatarService(db, demo_store=demo_store)


def get_vote_service(db: SessionDep, demo_store: DemoStoreDep) -> VoteService:
    return VoteService(db, demo_store=demo_store)


def get_leaderboard_service(
    db: SessionDep,
    demo_store: DemoStoreDep,
    mode: Annotated[AggregationMode, Depends(get_aggregation_mode)],
) -> LeaderboardService:
    return LeaderboardService(db, mode=mode, demo_store=demo_store)


def get_submission_service(
    db: SessionDep,
    settings: SettingsDep,
    heygen: Annotated[HeyGenClient, Depends(get_heygen_client)],
) -> SubmissionService:
    return SubmissionService(db, heygen=heygen, settings=settings)


def get_script_generator(settings: SettingsDep) -> ScriptGenerator:
    return ScriptGenerator(settings)


AvatarServiceDep = Annotated[AvatarService, Depends(get_avatar_service)]
VoteServiceDep = Annotated[VoteService, Depends(get_vote_service)]
LeaderboardServiceDep = Annotated[LeaderboardService, Depends(get_leaderboard_service)]
SubmissionServiceDep = Annotated[SubmissionService, Depends(get_submission_service)]
ScriptGeneratorDep = Annotated[ScriptGenerator, Depends(get_script_generator)]

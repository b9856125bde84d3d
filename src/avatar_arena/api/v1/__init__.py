"""Version 1 API endpoints."""

from .endpoints import (
    avatars_router,
    leaderboard_router,
    scripts_router,
    submissions_router,
    system_router,
    votes_router,
)

__all__ = [
    "avatars_router",
    "leaderboard_router",
    "votes_router",
    "submissions_router",
    "scripts_router",
    "system_router",
]

"""API endpoint modules for version 1."""

from .avatars import router as avatars_router
from .leaderboard import router as leaderboard_router
from .scripts import router as scripts_router
from .submissions import router as submissions_router
from .system import router as system_router
from .votes import router as votes_router

__all__ = [
    "avatars_router",
    "leaderboard_router",
    "scripts_router",
    "submissions_router",
    "system_router",
    "votes_router",
]

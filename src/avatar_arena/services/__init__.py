"""Business logic services for the Avatar Arena application."""

from .avatars import AvatarService
from .demo import DemoStore
from .heygen import HeyGenClient, HeyGenError
from .leaderboard import AggregationMode, LeaderboardService
from .scripts import ScriptGenerator
from .submissions import SubmissionService
from .votes import VoteService

__all__ = [
    "AggregationMode",
    "AvatarService",
    "DemoStore",
    "HeyGenClient",
    "HeyGenError",
    "LeaderboardService",
    "ScriptGenerator",
    "SubmissionService",
    "VoteService",
]

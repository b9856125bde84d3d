"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .avatar import AvatarCreate, AvatarResponse
from .leaderboard import LeaderboardEntry
from .script import ScriptRequest
from .submission import AvatarSubmissionCreate, SubmissionResponse, SubmissionResult
from .vote import VoteCounts, VoteCreate, VoteResponse

__all__ = [
    "AvatarCreate", "AvatarResponse",
    "LeaderboardEntry",
    "ScriptRequest",
    "AvatarSubmissionCreate", "SubmissionResponse", "SubmissionResult",
    "VoteCounts", "VoteCreate", "VoteResponse",
]

"""SQLAlchemy models for the Avatar Arena application."""

from .avatar import PERSONA_TAGS, Avatar, PersonaTag
from .submission import AvatarSubmission, HeyGenUsage, SubmissionStatus
from .vote import VOTE_TYPES, Vote, VoteType

__all__ = [
    "Avatar", "PersonaTag", "PERSONA_TAGS",
    "AvatarSubmission", "HeyGenUsage", "SubmissionStatus",
    "Vote", "VoteType", "VOTE_TYPES",
]

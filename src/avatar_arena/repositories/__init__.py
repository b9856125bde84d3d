"""Repositories wrapping SQLAlchemy access per entity."""

from .avatar_repo import AvatarRepository
from .submission_repo import SubmissionRepository
from .vote_repo import DuplicateVoteError, VoteRepository

__all__ = ["AvatarRepository", "DuplicateVoteError", "SubmissionRepository", "VoteRepository"]

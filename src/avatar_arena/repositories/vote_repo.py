"""Data access helpers for votes."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from avatar_arena.models.vote import Vote

__all__ = ["DuplicateVoteError", "VoteRepository", "is_duplicate_vote"]

UNIQUE_VOTE_CONSTRAINT = "uq_votes_avatar_device"
SQLITE_UNIQUE_VOTE_MESSAGE = "UNIQUE constraint failed: votes.avatar_id, votes.device_id"


class DuplicateVoteError(Exception):
    """Raised when the (avatar, device) uniqueness constraint rejects an insert."""


def is_duplicate_vote(err: IntegrityError) -> bool:
    """Return True only when ``err`` comes from the one-vote-per-device constraint.

    Other integrity failures, such as a foreign key to a deleted avatar, are
    not duplicates.
    """
    diag = getattr(err.orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None)
    if constraint_name is not None:
        return constraint_name == UNIQUE_VOTE_CONSTRAINT
    # SQLite reports the columns rather than the constraint name.
    return SQLITE_UNIQUE_VOTE_MESSAGE in str(err.orig)


class VoteRepository:
    """Database access for vote rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, avatar_id: str, device_id: str, vote_type: str) -> Vote:
        """Insert a vote.

        Raises:
            DuplicateVoteError: If this device already voted on the avatar.
        """
        vote = Vote(avatar_id=avatar_id, device_id=device_id, vote_type=vote_type)
        self.session.add(vote)
        try:
            self.session.commit()
        except IntegrityError as err:
            self.session.rollback()
            if not is_duplicate_vote(err):
                raise
            raise DuplicateVoteError(f"{device_id} already voted on {avatar_id}") from err
        self.session.refresh(vote)
        return vote

    def vote_types_for_avatar(self, avatar_id: str) -> list[str]:
        """Return the vote type of every vote cast on an avatar."""
        return list(self.session.scalars(select(Vote.vote_type).where(Vote.avatar_id == avatar_id)))

    def list_for_avatars(self, avatar_ids: Sequence[str]) -> list[tuple[str, str]]:
        """Return ``(avatar_id, vote_type)`` pairs for exactly the given avatars."""
        if not avatar_ids:
            return []
        rows = self.session.execute(
            select(Vote.avatar_id, Vote.vote_type).where(Vote.avatar_id.in_(avatar_ids))
        )
        return [(avatar_id, vote_type) for avatar_id, vote_type in rows]

"""Vote submission and per-avatar vote counts."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from avatar_arena.core.errors import ConflictError, NotFoundError, ValidationError
from avatar_arena.models import VOTE_TYPES, VoteType
from avatar_arena.repositories import AvatarRepository, DuplicateVoteError, VoteRepository
from avatar_arena.schemas import VoteCounts
from avatar_arena.services.demo import DemoStore

logger = logging.getLogger(__name__)

ALREADY_VOTED_MESSAGE = "You have already voted for this avatar"


def validate_vote(avatar_id: str | None, device_id: str | None, vote_type: str | None) -> None:
    """Reject votes with missing fields or an unknown vote type."""
    if not avatar_id or not device_id or not vote_type:
        raise ValidationError("Missing required fields")
    if vote_type not in VOTE_TYPES:
        raise ValidationError('Invalid vote type. Must be "up" or "down"')


class VoteService:
    """Cast votes against the database, or the demo store when there is none.

    Duplicate votes are detected by the unique (avatar_id, device_id)
    constraint at insert time, so two concurrent requests from one device
    cannot both succeed.
    """

    def __init__(self, session: Session | None, *, demo_store: DemoStore | None = None) -> None:
        self.session = session
        self.demo_store = demo_store

    def cast_vote(self, avatar_id: str, device_id: str, vote_type: str) -> Any:
        validate_vote(avatar_id, device_id, vote_type)

        if self.session is None:
            return self._cast_demo_vote(avatar_id, device_id, vote_type)

        if not AvatarRepository(self.session).exists(avatar_id):
            raise NotFoundError("Avatar not found")

        try:
            vote = VoteRepository(self.session).create(
                avatar_id=avatar_id,
                device_id=device_id,
                vote_type=vote_type,
            )
        except DuplicateVoteError as err:
            raise ConflictError(ALREADY_VOTED_MESSAGE) from err

        logger.debug("Recorded %s vote on avatar %s", vote_type, avatar_id)
        return vote

    def get_vote_counts(self, avatar_id: str | None) -> VoteCounts:
        if not avatar_id:
            raise ValidationError("Avatar ID is required")

        if self.session is None:
            counts = self._demo().get_votes().get(avatar_id, {"up": 0, "down": 0})
            up_votes, down_votes = counts["up"], counts["down"]
        else:
            vote_types = VoteRepository(self.session).vote_types_for_avatar(avatar_id)
            up_votes = sum(1 for vote_type in vote_types if vote_type == VoteType.UP.value)
            down_votes = sum(1 for vote_type in vote_types if vote_type == VoteType.DOWN.value)

        return VoteCounts(
            avatar_id=avatar_id,
            up_votes=up_votes,
            down_votes=down_votes,
            total_votes=up_votes + down_votes,
        )

    def _cast_demo_vote(self, avatar_id: str, device_id: str, vote_type: str) -> Any:
        store = self._demo()
        if not store.has_avatar(avatar_id):
            raise NotFoundError("Avatar not found")
        vote = store.add_vote(avatar_id, device_id, vote_type)
        if vote is None:
            raise ConflictError(ALREADY_VOTED_MESSAGE)
        return vote

    def _demo(self) -> DemoStore:
        if self.demo_store is None:
            raise RuntimeError("Demo vote requested without a demo store")
        return self.demo_store

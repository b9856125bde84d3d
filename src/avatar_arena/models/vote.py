"""Models capturing swipe votes on avatars."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from avatar_arena.db.session import Base
from avatar_arena.db.time import utcnow
from avatar_arena.models.avatar import new_id


class VoteType(str, Enum):
    UP = "up"
    DOWN = "down"


VOTE_TYPES: tuple[str, ...] = tuple(vote_type.value for vote_type in VoteType)


class Vote(Base):
    """One device's vote on one avatar.

    Votes are immutable once written. The device id is a client-generated
    opaque string, not an account.
    """

    __tablename__ = "votes"
    __table_args__ = (
        CheckConstraint("vote_type IN ('up', 'down')", name="ck_votes_vote_type"),
        # A second vote from the same device fails here and is reported as a conflict.
        UniqueConstraint("avatar_id", "device_id", name="uq_votes_avatar_device"),
        Index("ix_votes_avatar_id", "avatar_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    avatar_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("avatars.id", ondelete="CASCADE"),
        nullable=False,
    )
    device_id: Mapped[str] = mapped_column(String(128), nullable=False)
    vote_type: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

"""Models for user avatar submissions and video-generation usage."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from avatar_arena.db.session import Base
from avatar_arena.db.time import utcnow
from avatar_arena.models.avatar import Avatar, new_id


class SubmissionStatus(str, Enum):
    PROCESSING = "processing"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AvatarSubmission(Base):
    """Tracks a submission through video generation and review.

    Status moves processing -> pending on success or processing -> rejected
    when a step fails. Rejected rows are kept as the failure record.
    """

    __tablename__ = "avatar_submissions"
    __table_args__ = (
        CheckConstraint(
            "status IN ('processing', 'pending', 'approved', 'rejected')",
            name="ck_avatar_submissions_status",
        ),
        Index("ix_avatar_submissions_user_id", "user_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    avatar_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("avatars.id", ondelete="SET NULL"),
        nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=SubmissionStatus.PROCESSING.value
    )
    submission_data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    avatar: Mapped[Avatar | None] = relationship("Avatar", lazy="joined")


class HeyGenUsage(Base):
    """One call made to the video-generation API on behalf of a submitter."""

    __tablename__ = "heygen_usage"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    avatar_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("avatars.id", ondelete="SET NULL"),
        nullable=True,
    )
    api_call_type: Mapped[str] = mapped_column(String(32), nullable=False)
    tokens_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cost_usd: Mapped[Decimal] = mapped_column(Numeric(10, 4), nullable=False, default=0)
    response_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

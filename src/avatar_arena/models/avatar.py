"""SQLAlchemy model for avatars shown in the swipe deck."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from avatar_arena.db.session import Base
from avatar_arena.db.time import utcnow


class PersonaTag(str, Enum):
    """Fixed character categories an avatar can be filed under."""

    HACKER = "hacker"
    DIVA = "diva"
    FUNNY = "funny"
    SERIOUS = "serious"
    QUIRKY = "quirky"
    TECHY = "techy"


PERSONA_TAGS: tuple[str, ...] = tuple(tag.value for tag in PersonaTag)

PERSONA_DESCRIPTIONS: dict[PersonaTag, str] = {
    PersonaTag.HACKER: "Tech-savvy, mysterious, loves coding and cybersecurity",
    PersonaTag.DIVA: "Glamorous, confident, fashion-forward and fabulous",
    PersonaTag.FUNNY: "Humorous, witty, always ready with a joke or pun",
    PersonaTag.SERIOUS: "Professional, focused, business-minded and analytical",
    PersonaTag.QUIRKY: "Unique, eccentric, creative and unconventional",
    PersonaTag.TECHY: "Innovation-focused, startup enthusiast, future-oriented",
}

VOICE_TYPES: tuple[str, ...] = (
    "male_confident",
    "male_friendly",
    "male_tech",
    "male_casual",
    "female_confident",
    "female_friendly",
    "female_professional",
    "female_casual",
    "neutral_ai",
    "robotic",
)


def new_id() -> str:
    return str(uuid.uuid4())


class Avatar(Base):
    """An AI-generated avatar video with its script and persona."""

    __tablename__ = "avatars"
    __table_args__ = (
        CheckConstraint(
            "persona_tag IN ('hacker', 'diva', 'funny', 'serious', 'quirky', 'techy')",
            name="ck_avatars_persona_tag",
        ),
        Index("ix_avatars_persona_created", "persona_tag", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    creator_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    heygen_video_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    heygen_avatar_id: Mapped[str | None] = mapped_column(Text, nullable=True)

    script: Mapped[str] = mapped_column(Text, nullable=False)
    persona_tag: Mapped[str] = mapped_column(String(16), nullable=False)
    voice_type: Mapped[str] = mapped_column(String(64), nullable=False)

    # Moderation flags; submissions start unapproved.
    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    submission_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    moderation_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

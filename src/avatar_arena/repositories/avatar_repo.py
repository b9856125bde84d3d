"""Data access helpers for working with avatars."""
from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from avatar_arena.models.avatar import Avatar

__all__ = ["AvatarRepository"]


class AvatarRepository:
    """Thin wrapper around database access for avatar entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, avatar_id: str) -> bool:
        return self.session.scalar(select(Avatar.id).where(Avatar.id == avatar_id)) is not None

    def list_recent(
        self,
        *,
        persona: str | None = None,
        limit: int,
        offset: int = 0,
    ) -> list[Avatar]:
        """Return avatars newest first, optionally restricted to one persona."""
        stmt = select(Avatar)
        if persona:
            stmt = stmt.where(Avatar.persona_tag == persona)
        stmt = stmt.order_by(Avatar.created_at.desc()).offset(offset).limit(limit)
        return list(self.session.scalars(stmt))

    def create(self, **fields: Any) -> Avatar:
        """Insert a new avatar and return the persisted ORM instance."""
        avatar = Avatar(**fields)
        self.session.add(avatar)
        self.session.commit()
        self.session.refresh(avatar)
        return avatar

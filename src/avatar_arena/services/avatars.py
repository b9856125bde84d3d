"""Avatar feed listing and direct avatar creation."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from avatar_arena.core.errors import ValidationError
from avatar_arena.models import PERSONA_TAGS
from avatar_arena.repositories import AvatarRepository
from avatar_arena.schemas import AvatarCreate
from avatar_arena.services.demo import DemoStore


def validate_persona(persona_tag: str) -> None:
    if persona_tag not in PERSONA_TAGS:
        raise ValidationError(
            f"Invalid persona_tag. Must be one of: {', '.join(PERSONA_TAGS)}"
        )


class AvatarService:
    """Serve pages of avatars for the swipe deck, newest first."""

    def __init__(self, session: Session | None, *, demo_store: DemoStore | None = None) -> None:
        self.session = session
        self.demo_store = demo_store

    def list_avatars(self, persona: str | None, limit: int, offset: int = 0) -> list[Any]:
        if self.session is None:
            return self._demo().list_avatars(persona)[offset:offset + limit]
        return AvatarRepository(self.session).list_recent(
            persona=persona,
            limit=limit,
            offset=offset,
        )

    def create_avatar(self, data: AvatarCreate) -> Any:
        if not (data.image_url and data.voice_type and data.persona_tag and data.script):
            raise ValidationError("Missing required fields")
        validate_persona(data.persona_tag)

        fields = data.model_dump()
        if self.session is None:
            return self._demo().add_avatar(**fields)
        return AvatarRepository(self.session).create(**fields)

    def _demo(self) -> DemoStore:
        if self.demo_store is None:
            raise RuntimeError("Demo avatars requested without a demo store")
        return self.demo_store

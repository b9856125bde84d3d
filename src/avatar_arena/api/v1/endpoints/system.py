"""System and transparency endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from avatar_arena.api.v1.dependencies import SettingsDep, get_aggregation_mode
from avatar_arena.models import PERSONA_TAGS, VOTE_TYPES
from avatar_arena.models.avatar import PERSONA_DESCRIPTIONS, VOICE_TYPES
from avatar_arena.services import AggregationMode

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config(
    settings: SettingsDep,
    mode: Annotated[AggregationMode, Depends(get_aggregation_mode)],
) -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings; suitable for client setup.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "demo_mode": settings.demo_mode,
        "leaderboard": {
            "aggregation": mode.value,
            "default_limit": settings.leaderboard_default_limit,
            "max_limit": settings.max_page_size,
        },
        "personas": {tag.value: description for tag, description in PERSONA_DESCRIPTIONS.items()},
        "persona_tags": list(PERSONA_TAGS),
        "vote_types": list(VOTE_TYPES),
        "voice_types": list(VOICE_TYPES),
        "script_generation": "openai" if settings.openai_api_key else "canned",
    }

"""Leaderboard endpoint."""

from fastapi import APIRouter, Query

from avatar_arena.api.v1.dependencies import LeaderboardServiceDep, SettingsDep
from avatar_arena.schemas import LeaderboardEntry

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("")
async def get_leaderboard(
    service: LeaderboardServiceDep,
    settings: SettingsDep,
    persona: str | None = Query(None, description="Only rank avatars with this persona tag"),
    limit: int | None = Query(None, ge=1, description="Maximum number of entries"),
) -> dict[str, list[LeaderboardEntry]]:
    """Rank avatars by vote count, then approval rate.

    Args:
        service: Leaderboard service bound to the request's store
        settings: Runtime settings supplying default and maximum limits
        persona: Optional persona filter
        limit: Maximum number of entries to return

    Returns:
        Dictionary with the ranked ``leaderboard`` entries
    """
    size = min(limit or settings.leaderboard_default_limit, settings.max_page_size)
    return {"leaderboard": service.get_leaderboard(persona, size)}

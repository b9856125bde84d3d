"""Avatar feed endpoints."""

from fastapi import APIRouter, Query, status

from avatar_arena.api.v1.dependencies import AvatarServiceDep, SettingsDep
from avatar_arena.schemas import AvatarCreate, AvatarResponse

router = APIRouter(prefix="/avatars", tags=["avatars"])


@router.get("")
async def list_avatars(
    service: AvatarServiceDep,
    settings: SettingsDep,
    persona: str | None = Query(None, description="Only return avatars with this persona tag"),
    limit: int | None = Query(None, ge=1, description="Page size"),
    offset: int = Query(0, ge=0, description="Number of avatars to skip"),
) -> dict[str, list[AvatarResponse]]:
    """Return one page of avatars, newest first, for the swipe deck."""
    page_size = min(limit or settings.avatars_default_limit, settings.max_page_size)
    avatars = service.list_avatars(persona, page_size, offset)
    return {"avatars": [AvatarResponse.model_validate(avatar) for avatar in avatars]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_avatar(
    avatar_data: AvatarCreate,
    service: AvatarServiceDep,
) -> dict[str, AvatarResponse]:
    """Create an avatar from an already rendered video."""
    avatar = service.create_avatar(avatar_data)
    return {"avatar": AvatarResponse.model_validate(avatar)}

"""Script suggestion endpoint."""

from fastapi import APIRouter

from avatar_arena.api.v1.dependencies import ScriptGeneratorDep
from avatar_arena.schemas import ScriptRequest

router = APIRouter(prefix="/generate-script", tags=["scripts"])


@router.post("")
async def generate_script(request: ScriptRequest, generator: ScriptGeneratorDep) -> dict[str, str]:
    """Suggest a short script in the voice of the requested persona."""
    return {"script": await generator.generate(request.persona)}

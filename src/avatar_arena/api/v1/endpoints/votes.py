"""Vote endpoints."""

from fastapi import APIRouter, Query, status

from avatar_arena.api.v1.dependencies import VoteServiceDep
from avatar_arena.schemas import VoteCounts, VoteCreate, VoteResponse

router = APIRouter(prefix="/vote", tags=["votes"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def cast_vote(vote_data: VoteCreate, service: VoteServiceDep) -> dict[str, VoteResponse]:
    """Cast a device's single vote on an avatar.

    Returns 409 when the device has already voted on the avatar.
    """
    vote = service.cast_vote(vote_data.avatar_id, vote_data.device_id, vote_data.vote_type)
    return {"vote": VoteResponse.model_validate(vote)}


@router.get("", response_model=VoteCounts)
async def get_vote_counts(
    service: VoteServiceDep,
    avatar_id: str | None = Query(None, description="Avatar to count votes for"),
) -> VoteCounts:
    """Return up, down and total vote counts for one avatar."""
    return service.get_vote_counts(avatar_id)

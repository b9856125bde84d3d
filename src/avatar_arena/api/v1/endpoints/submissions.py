"""Avatar submission endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header, Query

from avatar_arena.api.v1.dependencies import SubmissionServiceDep, get_heygen_client
from avatar_arena.core.errors import UpstreamError, ValidationError
from avatar_arena.schemas import AvatarSubmissionCreate, SubmissionResponse
from avatar_arena.services import HeyGenClient, HeyGenError

router = APIRouter(tags=["submissions"])


@router.post("/submit-avatar")
async def submit_avatar(
    form: AvatarSubmissionCreate,
    service: SubmissionServiceDep,
) -> dict[str, Any]:
    """Render a new avatar video with the caller's API key and queue it for review."""
    result = await service.submit(form)
    return {"success": True, "data": result}


@router.get("/submit-avatar")
async def list_submissions(
    service: SubmissionServiceDep,
    user_id: str | None = Query(None, description="Submitter id; defaults to the anonymous submitter"),
    status: str | None = Query(None, description="Filter by submission status"),
) -> dict[str, Any]:
    """List submissions, newest first, each with its avatar if one was created."""
    submissions = service.list_submissions(user_id, status)
    return {
        "success": True,
        "data": [SubmissionResponse.model_validate(submission) for submission in submissions],
    }


@router.get("/video-status/{job_id}")
async def get_video_status(
    job_id: str,
    heygen: Annotated[HeyGenClient, Depends(get_heygen_client)],
    x_heygen_api_key: Annotated[str | None, Header()] = None,
) -> dict[str, Any]:
    """Poll the render state of a video job using the caller's API key."""
    if not x_heygen_api_key:
        raise ValidationError("Missing X-HeyGen-Api-Key header")
    try:
        video = await heygen.get_video_status(job_id, api_key=x_heygen_api_key)
    except HeyGenError as err:
        raise UpstreamError(
            "Failed to fetch HeyGen video status. Please check your API key and try again."
        ) from err
    return {"video": video.as_dict()}

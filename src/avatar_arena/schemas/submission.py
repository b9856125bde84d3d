"""Avatar submission schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .avatar import AvatarResponse


class AvatarSubmissionCreate(BaseModel):
    """Schema for submitting a new avatar to be rendered by the video API."""

    script: str = Field(..., description="Spoken content of the video")
    persona_tag: str
    voice_type: str
    heygen_api_key: str = Field(..., description="Caller's video-generation API key")
    submission_notes: str | None = None


class SubmissionResponse(BaseModel):
    """A submission with its joined avatar, if one was created."""

    id: str
    user_id: str
    avatar_id: str | None = None
    status: str
    submission_data: dict[str, Any]
    rejection_reason: str | None = None
    processed_at: datetime | None = None
    created_at: datetime
    avatar: AvatarResponse | None = None

    model_config = ConfigDict(from_attributes=True)


class SubmissionResult(BaseModel):
    """Outcome of a successful submission."""

    submission_id: str
    avatar_id: str
    status: str
    message: str

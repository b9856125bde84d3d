"""Avatar-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AvatarCreate(BaseModel):
    """Schema for creating an avatar directly from an existing video."""

    image_url: str = Field(..., description="Thumbnail or still image for the card")
    voice_type: str = Field(..., description="Voice profile name")
    persona_tag: str = Field(..., description="One of the fixed persona tags")
    script: str = Field(..., description="Spoken content of the video")
    heygen_video_url: str | None = Field(None, description="Rendered video location")


class AvatarResponse(BaseModel):
    """Schema for avatar information returned by the API."""

    id: str
    creator_id: str | None = None
    image_url: str
    heygen_video_url: str | None = None
    heygen_avatar_id: str | None = None
    script: str
    persona_tag: str
    voice_type: str
    is_approved: bool = False
    is_featured: bool = False
    submission_notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)

"""Vote-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote.

    ``vote_type`` is checked by the vote service so that an unknown value is
    reported with a specific message rather than a generic schema error.
    """

    avatar_id: str
    device_id: str = Field(..., max_length=128)
    vote_type: str = Field(..., description='"up" or "down"')


class VoteResponse(BaseModel):
    """A persisted vote."""

    id: str
    avatar_id: str
    device_id: str
    vote_type: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VoteCounts(BaseModel):
    """Vote totals for a single avatar."""

    avatar_id: str
    up_votes: int
    down_votes: int
    total_votes: int

"""Leaderboard schemas."""

from pydantic import Field

from .avatar import AvatarResponse


class LeaderboardEntry(AvatarResponse):
    """An avatar enriched with its vote aggregates.

    ``approval_rate`` is the percentage of up votes rounded to two decimals,
    and 0 for avatars without votes.
    """

    vote_count: int = Field(0, ge=0)
    up_votes: int = Field(0, ge=0)
    down_votes: int = Field(0, ge=0)
    approval_rate: float = Field(0.0, ge=0, le=100)

"""Data access helpers for avatar submissions and usage records."""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from avatar_arena.models.submission import AvatarSubmission, HeyGenUsage, SubmissionStatus

__all__ = ["SubmissionRepository"]


class SubmissionRepository:
    """Database access for the submission workflow.

    Every write commits on its own; the workflow relies on earlier steps
    surviving a later failure.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, user_id: str, submission_data: dict[str, Any]) -> AvatarSubmission:
        submission = AvatarSubmission(
            user_id=user_id,
            status=SubmissionStatus.PROCESSING.value,
            submission_data=submission_data,
        )
        self.session.add(submission)
        self.session.commit()
        self.session.refresh(submission)
        return submission

    def update(self, submission_id: str, **fields: Any) -> AvatarSubmission | None:
        """Apply ``fields`` to a submission and commit."""
        submission = self.session.get(AvatarSubmission, submission_id)
        if submission is None:
            return None
        for name, value in fields.items():
            setattr(submission, name, value)
        self.session.commit()
        return submission

    def list_for_user(self, user_id: str, status: str | None = None) -> list[AvatarSubmission]:
        """Return a user's submissions newest first, with avatars joined."""
        stmt = select(AvatarSubmission).where(AvatarSubmission.user_id == user_id)
        if status:
            stmt = stmt.where(AvatarSubmission.status == status)
        stmt = stmt.order_by(AvatarSubmission.created_at.desc())
        return list(self.session.scalars(stmt).unique())

    def log_usage(
        self,
        *,
        user_id: str,
        avatar_id: str | None,
        api_call_type: str,
        tokens_used: int,
        cost_usd: Decimal,
        response_data: dict[str, Any] | None,
    ) -> HeyGenUsage:
        usage = HeyGenUsage(
            user_id=user_id,
            avatar_id=avatar_id,
            api_call_type=api_call_type,
            tokens_used=tokens_used,
            cost_usd=cost_usd,
            response_data=response_data,
        )
        self.session.add(usage)
        self.session.commit()
        return usage

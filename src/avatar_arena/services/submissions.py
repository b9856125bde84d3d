"""Avatar submission workflow.

A submission runs these steps, each committed on its own:

1. record the submission as ``processing``;
2. render the video through the video-generation API with the caller's key;
3. create the (unapproved) avatar;
4. mark the submission ``pending`` and link the avatar;
5. log the API usage.

A failing step marks the submission ``rejected`` with a reason and ends the
request. Rows written by earlier steps are kept, not rolled back.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from avatar_arena.core.errors import InternalError, UpstreamError, ValidationError
from avatar_arena.core.settings import Settings
from avatar_arena.db.time import utcnow
from avatar_arena.models import AvatarSubmission, SubmissionStatus
from avatar_arena.repositories import AvatarRepository, SubmissionRepository
from avatar_arena.schemas import AvatarSubmissionCreate, SubmissionResult
from avatar_arena.services.avatars import validate_persona
from avatar_arena.services.heygen import HeyGenClient, HeyGenError

logger = logging.getLogger(__name__)

USAGE_CALL_TYPE = "generate_video"
USAGE_TOKENS = 1
USAGE_COST_USD = Decimal("0.10")

SUBMITTED_MESSAGE = "Avatar submitted successfully! It will be reviewed before going live."
FINALIZE_FAILED_MESSAGE = "Failed to finalize submission"


class SubmissionService:
    """Orchestrates avatar submissions against the database and video API."""

    def __init__(
        self,
        session: Session | None,
        *,
        heygen: HeyGenClient,
        settings: Settings,
    ) -> None:
        self.session = session
        self.heygen = heygen
        self.settings = settings

    def _repos(self) -> tuple[SubmissionRepository, AvatarRepository]:
        if self.session is None:
            raise InternalError("Database connection not available")
        return SubmissionRepository(self.session), AvatarRepository(self.session)

    async def submit(self, form: AvatarSubmissionCreate) -> SubmissionResult:
        if not (form.script and form.persona_tag and form.voice_type and form.heygen_api_key):
            raise ValidationError(
                "Missing required fields: script, persona_tag, voice_type, heygen_api_key"
            )
        validate_persona(form.persona_tag)
        submissions, avatars = self._repos()
        user_id = self.settings.default_submitter_id

        try:
            submission = submissions.create(
                user_id=user_id,
                submission_data={
                    "script": form.script,
                    "persona_tag": form.persona_tag,
                    "voice_type": form.voice_type,
                    "submission_notes": form.submission_notes,
                },
            )
        except SQLAlchemyError as err:
            logger.exception("Submission creation failed")
            raise InternalError("Failed to create submission record") from err

        try:
            video = await self.heygen.generate_video(
                script=form.script,
                voice_type=form.voice_type,
                api_key=form.heygen_api_key,
            )
        except HeyGenError as err:
            logger.warning("Video generation failed for submission %s: %s", submission.id, err)
            self._reject(submissions, submission, "HeyGen video generation failed")
            raise UpstreamError(
                "Failed to generate HeyGen video. Please check your API key and try again."
            ) from err

        try:
            avatar = avatars.create(
                creator_id=user_id,
                image_url=video.thumbnail_url or self.settings.placeholder_image_url,
                heygen_video_url=video.video_url,
                heygen_avatar_id=video.video_id,
                script=form.script,
                persona_tag=form.persona_tag,
                voice_type=form.voice_type,
                is_approved=False,
                is_featured=False,
                submission_notes=form.submission_notes,
            )
        except SQLAlchemyError as err:
            logger.exception("Avatar creation failed for submission %s", submission.id)
            avatars.session.rollback()
            self._reject(submissions, submission, "Failed to create avatar record")
            raise InternalError("Failed to create avatar record") from err

        try:
            submissions.update(
                submission.id,
                avatar_id=avatar.id,
                status=SubmissionStatus.PENDING.value,
                processed_at=utcnow(),
            )
            submissions.log_usage(
                user_id=user_id,
                avatar_id=avatar.id,
                api_call_type=USAGE_CALL_TYPE,
                tokens_used=USAGE_TOKENS,
                cost_usd=USAGE_COST_USD,
                response_data=video.as_dict(),
            )
        except SQLAlchemyError as err:
            logger.exception("Finalizing submission %s failed", submission.id)
            submissions.session.rollback()
            self._reject(submissions, submission, FINALIZE_FAILED_MESSAGE)
            raise InternalError(FINALIZE_FAILED_MESSAGE) from err
        logger.info("Submission %s created avatar %s", submission.id, avatar.id)

        return SubmissionResult(
            submission_id=submission.id,
            avatar_id=avatar.id,
            status=SubmissionStatus.PENDING.value,
            message=SUBMITTED_MESSAGE,
        )

    def list_submissions(
        self,
        user_id: str | None = None,
        status: str | None = None,
    ) -> list[AvatarSubmission]:
        submissions, _ = self._repos()
        return submissions.list_for_user(user_id or self.settings.default_submitter_id, status)

    @staticmethod
    def _reject(
        submissions: SubmissionRepository,
        submission: AvatarSubmission,
        reason: str,
    ) -> None:
        submissions.update(
            submission.id,
            status=SubmissionStatus.REJECTED.value,
            rejection_reason=reason,
        )

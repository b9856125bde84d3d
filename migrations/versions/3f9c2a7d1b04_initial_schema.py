"""initial schema

Revision ID: 3f9c2a7d1b04
Revises:
Create Date: 2026-10-19 09:12:44.218311

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f9c2a7d1b04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create avatars, votes, submissions and usage tables."""
    op.create_table(
        "avatars",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("creator_id", sa.String(length=36), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("heygen_video_url", sa.Text(), nullable=True),
        sa.Column("heygen_avatar_id", sa.Text(), nullable=True),
        sa.Column("script", sa.Text(), nullable=False),
        sa.Column("persona_tag", sa.String(length=16), nullable=False),
        sa.Column("voice_type", sa.String(length=64), nullable=False),
        sa.Column("is_approved", sa.Boolean(), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False),
        sa.Column("submission_notes", sa.Text(), nullable=True),
        sa.Column("moderation_notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "persona_tag IN ('hacker', 'diva', 'funny', 'serious', 'quirky', 'techy')",
            name="ck_avatars_persona_tag",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_avatars_persona_created", "avatars", ["persona_tag", "created_at"])

    op.create_table(
        "votes",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("avatar_id", sa.String(length=36), nullable=False),
        sa.Column("device_id", sa.String(length=128), nullable=False),
        sa.Column("vote_type", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("vote_type IN ('up', 'down')", name="ck_votes_vote_type"),
        sa.ForeignKeyConstraint(["avatar_id"], ["avatars.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("avatar_id", "device_id", name="uq_votes_avatar_device"),
    )
    op.create_index("ix_votes_avatar_id", "votes", ["avatar_id"])

    op.create_table(
        "avatar_submissions",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("avatar_id", sa.String(length=36), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("submission_data", sa.JSON(), nullable=False),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('processing', 'pending', 'approved', 'rejected')",
            name="ck_avatar_submissions_status",
        ),
        sa.ForeignKeyConstraint(["avatar_id"], ["avatars.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_avatar_submissions_user_id", "avatar_submissions", ["user_id"])

    op.create_table(
        "heygen_usage",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("avatar_id", sa.String(length=36), nullable=True),
        sa.Column("api_call_type", sa.String(length=32), nullable=False),
        sa.Column("tokens_used", sa.Integer(), nullable=False),
        sa.Column("cost_usd", sa.Numeric(precision=10, scale=4), nullable=False),
        sa.Column("response_data", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["avatar_id"], ["avatars.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop all tables created by this revision."""
    op.drop_table("heygen_usage")
    op.drop_index("ix_avatar_submissions_user_id", table_name="avatar_submissions")
    op.drop_table("avatar_submissions")
    op.drop_index("ix_votes_avatar_id", table_name="votes")
    op.drop_table("votes")
    op.drop_index("ix_avatars_persona_created", table_name="avatars")
    op.drop_table("avatars")

"""Unit tests for the ORM models defined in avatar_arena.models.

These tests verify basic mapping correctness: table names, the one vote per
device per avatar constraint, and that relationships are instrumented
attributes.
"""

import pytest
from sqlalchemy.orm import attributes

from avatar_arena import models


def test_table_names():
    """Model classes expose expected __tablename__ values."""
    assert models.Avatar.__tablename__ == "avatars"
    assert models.Vote.__tablename__ == "votes"
    assert models.AvatarSubmission.__tablename__ == "avatar_submissions"
    assert models.HeyGenUsage.__tablename__ == "heygen_usage"


def test_votes_unique_per_avatar_and_device():
    table = models.Vote.__table__
    unique = {
        tuple(column.name for column in constraint.columns)
        for constraint in table.constraints
        if constraint.__class__.__name__ == "UniqueConstraint"
    }
    assert ("avatar_id", "device_id") in unique


@pytest.mark.parametrize(
    ("model", "constraint_name"),
    [
        (models.Avatar, "ck_avatars_persona_tag"),
        (models.Vote, "ck_votes_vote_type"),
    ],
)
def test_check_constraints_present(model, constraint_name):
    names = {constraint.name for constraint in model.__table__.constraints}
    assert constraint_name in names


def test_submission_avatar_relationship_is_instrumented():
    assert isinstance(models.AvatarSubmission.avatar, attributes.InstrumentedAttribute)


def test_enum_values_match_allowed_sets():
    assert set(models.PERSONA_TAGS) == {tag.value for tag in models.PersonaTag}
    assert set(models.VOTE_TYPES) == {"up", "down"}

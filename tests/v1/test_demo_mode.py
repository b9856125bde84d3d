# mypy: ignore-errors
# tests/v1/test_demo_mode.py
"""Endpoints served from the in-memory demo store when no database is configured."""

import pytest
from fastapi import status

from avatar_arena.services.demo import DEMO_AVATARS

pytestmark = pytest.mark.usefixtures("demo_mode")


def _vote(client, avatar_id, device_id, vote_type="up"):
    return client.post(
        "/api/v1/vote",
        json={"avatar_id": avatar_id, "device_id": device_id, "vote_type": vote_type},
    )


def test_demo_avatars_listed(client) -> None:
    avatars = client.get("/api/v1/avatars", params={"limit": 100}).json()["avatars"]
    assert [avatar["id"] for avatar in avatars] == [avatar.id for avatar in DEMO_AVATARS]


def test_demo_avatars_persona_filter(client) -> None:
    avatars = client.get("/api/v1/avatars", params={"persona": "hacker"}).json()["avatars"]
    assert [avatar["id"] for avatar in avatars] == ["1", "7"]


def test_demo_vote_and_counts(client) -> None:
    assert _vote(client, "3", "phone-a", "up").status_code == status.HTTP_201_CREATED
    assert _vote(client, "3", "phone-b", "down").status_code == status.HTTP_201_CREATED

    counts = client.get("/api/v1/vote", params={"avatar_id": "3"}).json()
    assert counts == {"avatar_id": "3", "up_votes": 1, "down_votes": 1, "total_votes": 2}


def test_demo_vote_id_prefix(client) -> None:
    vote = _vote(client, "2", "phone-a").json()["vote"]
    assert vote["id"].startswith("demo-")


def test_demo_duplicate_vote_is_conflict(client) -> None:
    assert _vote(client, "1", "phone-a").status_code == status.HTTP_201_CREATED

    response = _vote(client, "1", "phone-a", "down")
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "You have already voted for this avatar"

    # Another device is still free to vote on the same avatar.
    assert _vote(client, "1", "phone-b").status_code == status.HTTP_201_CREATED


def test_demo_vote_unknown_avatar(client) -> None:
    assert _vote(client, "999", "phone-a").status_code == status.HTTP_404_NOT_FOUND


def test_demo_leaderboard_ranks_votes(client) -> None:
    for device in ("a", "b", "c"):
        _vote(client, "5", device, "up")
    _vote(client, "2", "a", "up")
    _vote(client, "2", "b", "down")

    entries = client.get("/api/v1/leaderboard").json()["leaderboard"]
    assert len(entries) == len(DEMO_AVATARS)
    assert entries[0]["id"] == "5"
    assert entries[0]["approval_rate"] == 100.0
    assert entries[1]["id"] == "2"
    assert entries[1]["approval_rate"] == 50.0
    assert all(entry["vote_count"] == 0 for entry in entries[2:])


def test_demo_leaderboard_persona_and_limit(client) -> None:
    entries = client.get("/api/v1/leaderboard", params={"persona": "diva", "limit": 1}).json()["leaderboard"]
    assert len(entries) == 1
    assert entries[0]["persona_tag"] == "diva"


def test_demo_create_avatar_appends(client) -> None:
    payload = {
        "image_url": "https://img.example.com/demo.jpg",
        "voice_type": "neutral_ai",
        "persona_tag": "techy",
        "script": "Compiling charm...",
    }
    response = client.post("/api/v1/avatars", json=payload)
    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()["avatar"]

    avatars = client.get("/api/v1/avatars", params={"persona": "techy"}).json()["avatars"]
    assert created["id"] in [avatar["id"] for avatar in avatars]


def test_demo_submission_needs_database(client, mock_heygen) -> None:
    response = client.post(
        "/api/v1/submit-avatar",
        json={
            "script": "hello",
            "persona_tag": "funny",
            "voice_type": "neutral_ai",
            "heygen_api_key": "key",
        },
    )
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["error"] == "Database connection not available"
    mock_heygen.generate_video.assert_not_awaited()

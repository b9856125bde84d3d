# mypy: ignore-errors
# tests/v1/test_avatars.py
"""Tests for the avatar feed endpoints."""

from fastapi import status

AVATAR_PAYLOAD = {
    "image_url": "https://img.example.com/new.jpg",
    "voice_type": "female_confident",
    "persona_tag": "diva",
    "script": "Darling, swipe right.",
    "heygen_video_url": "https://cdn.example.com/new.mp4",
}


def test_list_avatars_newest_first(client, make_avatar) -> None:
    avatars = [make_avatar() for _ in range(3)]

    response = client.get("/api/v1/avatars")
    assert response.status_code == status.HTTP_200_OK
    ids = [avatar["id"] for avatar in response.json()["avatars"]]
    assert ids == [avatar.id for avatar in reversed(avatars)]


def test_list_avatars_pagination(client, make_avatar) -> None:
    avatars = [make_avatar() for _ in range(5)]
    newest_first = [avatar.id for avatar in reversed(avatars)]

    page = client.get("/api/v1/avatars", params={"limit": 2, "offset": 2}).json()["avatars"]
    assert [avatar["id"] for avatar in page] == newest_first[2:4]


def test_list_avatars_default_page_size(client, make_avatar, test_settings) -> None:
    for _ in range(test_settings.avatars_default_limit + 2):
        make_avatar()

    avatars = client.get("/api/v1/avatars").json()["avatars"]
    assert len(avatars) == test_settings.avatars_default_limit


def test_list_avatars_persona_filter(client, make_avatar) -> None:
    make_avatar("hacker")
    diva = make_avatar("diva")

    avatars = client.get("/api/v1/avatars", params={"persona": "diva"}).json()["avatars"]
    assert [avatar["id"] for avatar in avatars] == [diva.id]


def test_create_avatar(client) -> None:
    response = client.post("/api/v1/avatars", json=AVATAR_PAYLOAD)
    assert response.status_code == status.HTTP_201_CREATED

    avatar = response.json()["avatar"]
    assert avatar["persona_tag"] == "diva"
    assert avatar["heygen_video_url"] == AVATAR_PAYLOAD["heygen_video_url"]
    assert avatar["is_approved"] is False

    listed = client.get("/api/v1/avatars").json()["avatars"]
    assert [item["id"] for item in listed] == [avatar["id"]]


def test_create_avatar_missing_fields(client) -> None:
    payload = {key: value for key, value in AVATAR_PAYLOAD.items() if key != "script"}
    response = client.post("/api/v1/avatars", json=payload)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    response = client.post("/api/v1/avatars", json={**AVATAR_PAYLOAD, "image_url": ""})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Missing required fields"


def test_create_avatar_unknown_persona(client) -> None:
    response = client.post("/api/v1/avatars", json={**AVATAR_PAYLOAD, "persona_tag": "pirate"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "persona_tag" in response.json()["error"]

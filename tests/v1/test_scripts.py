# mypy: ignore-errors
# tests/v1/test_scripts.py
"""Tests for the script suggestion endpoint."""

from fastapi import status

from avatar_arena.models import PersonaTag
from avatar_arena.services.scripts import CANNED_SCRIPTS


def test_generate_script_without_api_key_uses_canned_scripts(client) -> None:
    for persona in PersonaTag:
        response = client.post("/api/v1/generate-script", json={"persona": persona.value})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["script"] in CANNED_SCRIPTS[persona]


def test_generate_script_invalid_persona(client) -> None:
    response = client.post("/api/v1/generate-script", json={"persona": "pirate"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Invalid persona provided"


def test_generate_script_missing_persona(client) -> None:
    response = client.post("/api/v1/generate-script", json={})
    assert response.status_code == status.HTTP_400_BAD_REQUEST

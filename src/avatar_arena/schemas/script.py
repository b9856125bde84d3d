"""Script generation schemas."""

from pydantic import BaseModel


class ScriptRequest(BaseModel):
    persona: str

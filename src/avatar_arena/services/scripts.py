"""Persona script suggestions for the submission form."""

from __future__ import annotations

import logging
import random
from typing import Any

import httpx

from avatar_arena.core.errors import InternalError, ValidationError
from avatar_arena.core.settings import Settings
from avatar_arena.models import PersonaTag

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a creative writer specializing in short, engaging character scripts for a "
    "swipe-based voting app. Keep scripts under 60 words and make them compelling for "
    "users to vote on."
)

PERSONA_PROMPTS: dict[PersonaTag, str] = {
    PersonaTag.HACKER: (
        "Generate a short, witty script (max 60 words) for a hacker character. Make it edgy, "
        "tech-savvy, and slightly mysterious. Include references to coding, cybersecurity, "
        "or digital rebellion."
    ),
    PersonaTag.DIVA: (
        "Generate a short, glamorous script (max 60 words) for a diva character. Make it "
        "confident, fabulous, and slightly dramatic. Include references to luxury, style, "
        "or being fabulous."
    ),
    PersonaTag.FUNNY: (
        "Generate a short, humorous script (max 60 words) for a funny character. Make it "
        "witty, self-deprecating, and relatable. Include everyday situations or quirky "
        "observations."
    ),
    PersonaTag.SERIOUS: (
        "Generate a short, professional script (max 60 words) for a serious character. Make "
        "it thoughtful, inspiring, and meaningful. Focus on growth, success, or deep "
        "connections."
    ),
    PersonaTag.QUIRKY: (
        "Generate a short, eccentric script (max 60 words) for a quirky character. Make it "
        "weird, endearing, and unique. Include unusual hobbies, strange thoughts, or odd "
        "observations."
    ),
    PersonaTag.TECHY: (
        "Generate a short, nerdy script (max 60 words) for a tech enthusiast. Make it geeky, "
        "relatable to developers, and include programming references or tech humor."
    ),
}

CANNED_SCRIPTS: dict[PersonaTag, tuple[str, ...]] = {
    PersonaTag.HACKER: (
        "I've just breached the firewalls of three rogue AIs. Swipe right if you want in.",
        "Zero-day exploits are my morning coffee. Care to join the dark side?",
        "I speak fluent binary and broken English. 01001000 01101001 there!",
    ),
    PersonaTag.DIVA: (
        "Darling, I'm too glamorous to be swiped left. Prove your taste.",
        "I don't do ordinary, sweetie. My aura is premium subscription only.",
        "Honey, I'm not high maintenance, I'm just worth it. Swipe accordingly.",
    ),
    PersonaTag.FUNNY: (
        "I'm 90% caffeine and 10% bad decisions. Swipe accordingly.",
        "My life is like a romantic comedy, except it's more comedy than romance.",
        "I put the 'fun' in dysfunctional. Ready for this adventure?",
    ),
    PersonaTag.SERIOUS: (
        "Excellence isn't a skill, it's an attitude. Are you ready to elevate?",
        "I believe in meaningful connections and purposeful conversations. You?",
        "Quality over quantity, always. Let's make this interaction count.",
    ),
    PersonaTag.QUIRKY: (
        "I collect vintage rubber ducks and existential thoughts. Interested?",
        "My superpower is making awkward situations even more awkward. Cool, right?",
        "I name my plants and they judge my life choices. We're all friends here.",
    ),
    PersonaTag.TECHY: (
        "I debug code by day and debug my life by night. Both need work.",
        "My relationship status: It's complicated with JavaScript. You understand?",
        "I speak Python, Java, and sarcasm fluently. Pick your favorite.",
    ),
}


def parse_persona(persona: str | None) -> PersonaTag:
    try:
        return PersonaTag(persona)
    except ValueError as err:
        raise ValidationError("Invalid persona provided") from err


def pick_canned_script(persona: PersonaTag, rng: random.Random | None = None) -> str:
    return (rng or random).choice(CANNED_SCRIPTS[persona])


class ScriptGenerator:
    """Produce a script for a persona, via a chat-completions API when configured."""

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    async def generate(self, persona: str | None) -> str:
        tag = parse_persona(persona)
        if not self.settings.openai_api_key:
            return pick_canned_script(tag)

        body = {
            "model": self.settings.openai_model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": PERSONA_PROMPTS[tag]},
            ],
            "max_tokens": 100,
            "temperature": 0.8,
        }
        headers = {"Authorization": f"Bearer {self.settings.openai_api_key}"}
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.openai_timeout_seconds),
                transport=self._transport,
            ) as client:
                response = await client.post(self.settings.openai_api_url, json=body, headers=headers)
                response.raise_for_status()
                data: Any = response.json()
        except (httpx.HTTPError, ValueError) as err:
            logger.warning("Script generation request failed: %s", err)
            raise InternalError("Failed to generate script") from err

        try:
            content = data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError):
            content = ""
        return content.strip()

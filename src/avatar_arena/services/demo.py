"""In-memory avatar list and vote tally used when no database is configured.

Demo votes live only in this process. The voted set is keyed by device id so
that each device gets one vote per avatar, the same rule the database
enforces, but nothing here is shared with other processes or persisted.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field, replace
from datetime import datetime
from threading import Lock

from avatar_arena.db.time import epoch_millis, utcnow
from avatar_arena.models.avatar import new_id


@dataclass
class DemoAvatar:
    """Attribute-compatible stand-in for :class:`avatar_arena.models.Avatar`."""

    id: str
    image_url: str
    voice_type: str
    persona_tag: str
    script: str
    heygen_video_url: str | None = None
    heygen_avatar_id: str | None = None
    creator_id: str | None = None
    is_approved: bool = True
    is_featured: bool = False
    submission_notes: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class DemoVote:
    id: str
    avatar_id: str
    device_id: str
    vote_type: str
    created_at: datetime


def _unsplash(photo: str) -> str:
    return f"https://images.unsplash.com/{photo}?w=400&h=400&fit=crop&crop=face"


DEMO_AVATARS: tuple[DemoAvatar, ...] = (
    DemoAvatar(
        id="1",
        image_url=_unsplash("photo-1507003211169-0a1dd7228f2d"),
        voice_type="male_confident",
        persona_tag="hacker",
        script="I've just breached the firewalls of three rogue AIs. Swipe right if you want in.",
    ),
    DemoAvatar(
        id="2",
        image_url=_unsplash("photo-1494790108755-2616b612b786"),
        voice_type="female_elegant",
        persona_tag="diva",
        script="Darling, I'm too glamorous to be swiped left. Prove your taste.",
    ),
    DemoAvatar(
        id="3",
        image_url=_unsplash("photo-1472099645785-5658abf4ff4e"),
        voice_type="male_friendly",
        persona_tag="funny",
        script="I'm 90% caffeine and 10% bad decisions. Swipe accordingly.",
    ),
    DemoAvatar(
        id="4",
        image_url=_unsplash("photo-1438761681033-6461ffad8d80"),
        voice_type="female_professional",
        persona_tag="serious",
        script="Excellence isn't a skill, it's an attitude. Are you ready to elevate?",
    ),
    DemoAvatar(
        id="5",
        image_url=_unsplash("photo-1500648767791-00dcc994a43e"),
        voice_type="male_quirky",
        persona_tag="quirky",
        script="I collect vintage rubber ducks and existential thoughts. Interested?",
    ),
    DemoAvatar(
        id="6",
        image_url=_unsplash("photo-1534528741775-53994a69daeb"),
        voice_type="female_tech",
        persona_tag="techy",
        script="I debug code by day and debug my life by night. Both need work.",
    ),
    DemoAvatar(
        id="7",
        image_url=_unsplash("photo-1506794778202-cad84cf45f1d"),
        voice_type="male_mysterious",
        persona_tag="hacker",
        script="Zero-day exploits are my morning coffee. Care to join the dark side?",
    ),
    DemoAvatar(
        id="8",
        image_url=_unsplash("photo-1544005313-94ddf0286df2"),
        voice_type="female_glamorous",
        persona_tag="diva",
        script="I don't do ordinary, sweetie. My aura is premium subscription only.",
    ),
    DemoAvatar(
        id="9",
        image_url=_unsplash("photo-1507591064344-4c6ce005b128"),
        voice_type="male_casual",
        persona_tag="funny",
        script="My life is like a romantic comedy, except it's more comedy than romance.",
    ),
    DemoAvatar(
        id="10",
        image_url=_unsplash("photo-1487412720507-e7ab37603c6f"),
        voice_type="female_confident",
        persona_tag="serious",
        script="I believe in meaningful connections and purposeful conversations. You?",
    ),
)


class DemoStore:
    """Process-local avatars, per-avatar tallies and the set of cast votes.

    Nothing here is bounded or evicted: the tallies and the voted set grow
    with every new avatar and device id until the process restarts, so any
    anonymous caller can enlarge them. Demo mode is not meant for public
    deployment.
    """

    def __init__(self, avatars: tuple[DemoAvatar, ...] = DEMO_AVATARS) -> None:
        self._lock = Lock()
        self._avatars: list[DemoAvatar] = [replace(avatar) for avatar in avatars]
        self._tallies: defaultdict[str, dict[str, int]] = defaultdict(
            lambda: {"up": 0, "down": 0}
        )
        self._voted: set[tuple[str, str]] = set()

    # Avatars

    def list_avatars(self, persona: str | None = None) -> list[DemoAvatar]:
        with self._lock:
            avatars = list(self._avatars)
        if persona:
            avatars = [avatar for avatar in avatars if avatar.persona_tag == persona]
        return avatars

    def has_avatar(self, avatar_id: str) -> bool:
        with self._lock:
            return any(avatar.id == avatar_id for avatar in self._avatars)

    def add_avatar(self, **fields: object) -> DemoAvatar:
        avatar = DemoAvatar(id=new_id(), **fields)  # type: ignore[arg-type]
        with self._lock:
            self._avatars.append(avatar)
        return avatar

    # Votes

    def get_votes(self) -> dict[str, dict[str, int]]:
        """Return a copy of the ``{avatar_id: {"up": n, "down": m}}`` tallies."""
        with self._lock:
            return {avatar_id: dict(counts) for avatar_id, counts in self._tallies.items()}

    def add_vote(self, avatar_id: str, device_id: str, vote_type: str) -> DemoVote | None:
        """Record a vote, or return None if this device already voted on the avatar."""
        with self._lock:
            key = (device_id, avatar_id)
            if key in self._voted:
                return None
            self._voted.add(key)
            self._tallies[avatar_id][vote_type] += 1
        created_at = utcnow()
        return DemoVote(
            id=f"demo-{epoch_millis(created_at)}",
            avatar_id=avatar_id,
            device_id=device_id,
            vote_type=vote_type,
            created_at=created_at,
        )

    def clear_votes(self) -> None:
        with self._lock:
            self._tallies.clear()
            self._voted.clear()

"""Leaderboard ranking and vote aggregation.

Entries are ordered by total votes, then by approval rate, both descending.
Three execution paths produce the same shape of result:

- ``aggregate``: one SQL statement joining avatars to grouped vote counts.
- ``fallback``: fetch the newest ``limit`` avatars, fetch their votes, and
  reduce in Python. Candidates are cut by recency *before* ranking, so an
  older avatar with many votes can be missing from the result. This matches
  the behaviour clients already rely on and is left as is.
- demo: rank the in-memory demo avatars with the demo tallies.

The SQL path is chosen once at startup (see :func:`resolve_aggregation_mode`),
not retried per request.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy import Select, case, func, select
from sqlalchemy.exc import ProgrammingError
from sqlalchemy.orm import Session

from avatar_arena.core.settings import Settings
from avatar_arena.db.session import Database
from avatar_arena.models import Avatar, Vote, VoteType
from avatar_arena.repositories import AvatarRepository, VoteRepository
from avatar_arena.schemas import AvatarResponse, LeaderboardEntry
from avatar_arena.services.demo import DemoStore

logger = logging.getLogger(__name__)


class AggregationMode(str, Enum):
    AGGREGATE = "aggregate"
    FALLBACK = "fallback"


@dataclass
class VoteTally:
    up: int = 0
    down: int = 0

    @property
    def total(self) -> int:
        return self.up + self.down


def compute_approval_rate(up_votes: int, total_votes: int) -> float:
    """Return the percentage of up votes rounded to two decimals, 0 without votes."""
    if total_votes <= 0:
        return 0.0
    return round(up_votes / total_votes * 100, 2)


def tally_votes(rows: Iterable[tuple[str, str]]) -> dict[str, VoteTally]:
    """Reduce ``(avatar_id, vote_type)`` pairs into per-avatar tallies."""
    tallies: dict[str, VoteTally] = {}
    for avatar_id, vote_type in rows:
        tally = tallies.setdefault(avatar_id, VoteTally())
        if vote_type == VoteType.UP.value:
            tally.up += 1
        else:
            tally.down += 1
    return tallies


def rank_entries(entries: Iterable[LeaderboardEntry]) -> list[LeaderboardEntry]:
    """Sort by vote count, then approval rate, both descending."""
    return sorted(entries, key=lambda entry: (-entry.vote_count, -entry.approval_rate))


def build_entry(
    avatar: Any,
    up_votes: int,
    down_votes: int,
    approval_rate: float | None = None,
) -> LeaderboardEntry:
    """Attach vote aggregates to an avatar (ORM row or demo avatar)."""
    fields = AvatarResponse.model_validate(avatar).model_dump()
    total = up_votes + down_votes
    if approval_rate is None:
        approval_rate = compute_approval_rate(up_votes, total)
    return LeaderboardEntry(
        **fields,
        vote_count=total,
        up_votes=up_votes,
        down_votes=down_votes,
        approval_rate=approval_rate,
    )


def aggregate_statement(persona: str | None, limit: int) -> Select[Any]:
    """Build the single-query leaderboard statement."""
    totals = (
        select(
            Vote.avatar_id.label("avatar_id"),
            func.count().label("total_votes"),
            func.count(case((Vote.vote_type == VoteType.UP.value, 1))).label("up_votes"),
            func.count(case((Vote.vote_type == VoteType.DOWN.value, 1))).label("down_votes"),
        )
        .group_by(Vote.avatar_id)
        .subquery("v")
    )
    total_votes = func.coalesce(totals.c.total_votes, 0)
    up_votes = func.coalesce(totals.c.up_votes, 0)
    vote_count = total_votes.label("vote_count")
    approval_rate = case(
        (total_votes == 0, 0),
        else_=func.round(up_votes * 100.0 / total_votes, 2),
    ).label("approval_rate")

    stmt = select(
        Avatar,
        vote_count,
        up_votes.label("up_votes"),
        func.coalesce(totals.c.down_votes, 0).label("down_votes"),
        approval_rate,
    ).outerjoin(totals, totals.c.avatar_id == Avatar.id)
    if persona:
        stmt = stmt.where(Avatar.persona_tag == persona)
    return stmt.order_by(vote_count.desc(), approval_rate.desc()).limit(limit)


def resolve_aggregation_mode(settings: Settings, database: Database | None) -> AggregationMode:
    """Pick the SQL aggregation path once, at startup.

    An explicit ``LEADERBOARD_AGGREGATION`` wins. With ``auto`` the aggregate
    statement is run once against the database. Only a ``ProgrammingError``
    (the database cannot run the statement) selects the fallback path for the
    life of the process; connection failures and other operational errors
    propagate.
    """
    if settings.leaderboard_aggregation != "auto":
        return AggregationMode(settings.leaderboard_aggregation)
    if database is None:
        return AggregationMode.AGGREGATE

    with database.session() as session:
        try:
            session.execute(aggregate_statement(None, 1)).all()
        except ProgrammingError as err:
            logger.warning(
                "Aggregate leaderboard query unavailable, using fallback path: %s", err
            )
            return AggregationMode.FALLBACK
    return AggregationMode.AGGREGATE


class LeaderboardService:
    """Compute ranked leaderboard entries from the configured store."""

    def __init__(
        self,
        session: Session | None,
        *,
        mode: AggregationMode = AggregationMode.AGGREGATE,
        demo_store: DemoStore | None = None,
    ) -> None:
        self.session = session
        self.mode = mode
        self.demo_store = demo_store

    def get_leaderboard(self, persona: str | None, limit: int) -> list[LeaderboardEntry]:
        if self.session is None:
            return self._from_demo(persona, limit)
        if self.mode is AggregationMode.FALLBACK:
            return self._fallback(self.session, persona, limit)
        return self._aggregate(self.session, persona, limit)

    def _aggregate(self, session: Session, persona: str | None, limit: int) -> list[LeaderboardEntry]:
        rows = session.execute(aggregate_statement(persona, limit)).all()
        return [
            build_entry(avatar, int(up_votes), int(down_votes), float(approval_rate))
            for avatar, _vote_count, up_votes, down_votes, approval_rate in rows
        ]

    def _fallback(self, session: Session, persona: str | None, limit: int) -> list[LeaderboardEntry]:
        # Limited by recency before ranking; see the module docstring.
        avatars = AvatarRepository(session).list_recent(persona=persona, limit=limit)
        rows = VoteRepository(session).list_for_avatars([avatar.id for avatar in avatars])
        return self._rank(avatars, tally_votes(rows))

    def _from_demo(self, persona: str | None, limit: int) -> list[LeaderboardEntry]:
        if self.demo_store is None:
            raise RuntimeError("Demo leaderboard requested without a demo store")
        tallies = {
            avatar_id: VoteTally(up=counts["up"], down=counts["down"])
            for avatar_id, counts in self.demo_store.get_votes().items()
        }
        return self._rank(self.demo_store.list_avatars(persona), tallies)[:limit]

    @staticmethod
    def _rank(avatars: Sequence[Any], tallies: dict[str, VoteTally]) -> list[LeaderboardEntry]:
        entries = []
        for avatar in avatars:
            tally = tallies.get(avatar.id, VoteTally())
            entries.append(build_entry(avatar, tally.up, tally.down))
        return rank_entries(entries)

from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.orm import Session

from avatar_arena.core.settings import Settings
from avatar_arena.db.session import Database
from avatar_arena.services.demo import DemoStore
from avatar_arena.services.leaderboard import (
    AggregationMode,
    LeaderboardService,
    build_entry,
    compute_approval_rate,
    rank_entries,
    resolve_aggregation_mode,
    tally_votes,
)


def _avatar(avatar_id: str) -> SimpleNamespace:
    return SimpleNamespace(
        id=avatar_id,
        image_url="https://img.example.com/a.jpg",
        script="hi",
        persona_tag="funny",
        voice_type="neutral_ai",
    )


@pytest.mark.parametrize(
    ("up", "total", "expected"),
    [
        (0, 0, 0.0),
        (3, 4, 75.0),
        (2, 3, 66.67),
        (1, 3, 33.33),
        (5, 5, 100.0),
    ],
)
def test_compute_approval_rate(up, total, expected):
    assert compute_approval_rate(up, total) == expected


def test_tally_votes():
    rows = [("a", "up"), ("a", "up"), ("a", "down"), ("b", "down")]
    tallies = tally_votes(rows)
    assert (tallies["a"].up, tallies["a"].down, tallies["a"].total) == (2, 1, 3)
    assert (tallies["b"].up, tallies["b"].down) == (0, 1)
    assert "c" not in tallies


def test_rank_entries_orders_by_count_then_rate():
    entries = [
        build_entry(_avatar("few"), 1, 0),
        build_entry(_avatar("many-mixed"), 2, 2),
        build_entry(_avatar("many-loved"), 4, 0),
        build_entry(_avatar("tied-lower"), 1, 3),
    ]
    ranked = [entry.id for entry in rank_entries(entries)]
    assert ranked == ["many-loved", "many-mixed", "tied-lower", "few"]


def test_build_entry_without_votes():
    entry = build_entry(_avatar("x"), 0, 0)
    assert entry.vote_count == 0
    assert entry.approval_rate == 0


def test_explicit_setting_skips_probe(mocker):
    database = mocker.Mock(spec=Database)
    settings = Settings(_env_file=None, LEADERBOARD_AGGREGATION="fallback")

    assert resolve_aggregation_mode(settings, database) is AggregationMode.FALLBACK
    database.session.assert_not_called()


def test_auto_without_database_is_aggregate():
    settings = Settings(_env_file=None, LEADERBOARD_AGGREGATION="auto")
    assert resolve_aggregation_mode(settings, None) is AggregationMode.AGGREGATE


def test_auto_probe_succeeds(engine: Engine):
    settings = Settings(_env_file=None, LEADERBOARD_AGGREGATION="auto")
    database = Database("sqlite://", engine=engine)
    assert resolve_aggregation_mode(settings, database) is AggregationMode.AGGREGATE


def _database_failing_with(mocker, error):
    database = mocker.MagicMock(spec=Database)
    database.session.return_value.__enter__.return_value.execute.side_effect = error
    return database


def test_auto_probe_unsupported_statement_selects_fallback(mocker):
    """A database that cannot run the aggregate statement gets the two-step path."""
    settings = Settings(_env_file=None, LEADERBOARD_AGGREGATION="auto")
    error = ProgrammingError("SELECT", {}, Exception("function round(double precision, integer) does not exist"))
    database = _database_failing_with(mocker, error)

    assert resolve_aggregation_mode(settings, database) is AggregationMode.FALLBACK


def test_auto_probe_connection_failure_propagates(mocker):
    settings = Settings(_env_file=None, LEADERBOARD_AGGREGATION="auto")
    error = OperationalError("SELECT", {}, Exception("could not connect to server"))
    database = _database_failing_with(mocker, error)

    with pytest.raises(OperationalError):
        resolve_aggregation_mode(settings, database)


def test_auto_probe_missing_tables_is_not_silenced():
    """SQLite reports a missing table as an operational error, which is raised."""
    settings = Settings(_env_file=None, LEADERBOARD_AGGREGATION="auto")
    database = Database("sqlite://", engine=create_engine("sqlite://"))
    try:
        with pytest.raises(OperationalError):
            resolve_aggregation_mode(settings, database)
    finally:
        database.dispose()


def test_paths_agree_when_every_avatar_fits(db_session: Session, make_avatar, add_votes):
    avatars = [make_avatar() for _ in range(4)]
    for i, avatar in enumerate(avatars):
        add_votes(avatar, up=i, down=3 - i)

    aggregate = LeaderboardService(db_session, mode=AggregationMode.AGGREGATE).get_leaderboard(None, 10)
    fallback = LeaderboardService(db_session, mode=AggregationMode.FALLBACK).get_leaderboard(None, 10)

    def key(entries):
        return [(e.id, e.vote_count, e.up_votes, e.down_votes, round(e.approval_rate, 2)) for e in entries]

    assert key(aggregate) == key(fallback)


def test_demo_leaderboard_without_votes_keeps_listing_order():
    store = DemoStore()
    entries = LeaderboardService(None, demo_store=store).get_leaderboard(None, 3)
    assert [entry.id for entry in entries] == ["1", "2", "3"]
    assert all(entry.vote_count == 0 for entry in entries)

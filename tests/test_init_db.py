# tests/test_init_db.py
from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect

from avatar_arena.scripts.init_db import main


def test_init_db_creates_tables(tmp_path: Path, capsys) -> None:
    url = f"sqlite:///{tmp_path / 'arena.db'}"

    assert main(["--database-url", url]) == 0
    assert "initialized" in capsys.readouterr().out

    engine = create_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {"avatars", "votes", "avatar_submissions", "heygen_usage"} <= tables


def test_init_db_drop_is_repeatable(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'arena.db'}"
    assert main(["--database-url", url]) == 0
    assert main(["--database-url", url, "--drop"]) == 0


def test_init_db_requires_url(monkeypatch) -> None:
    from avatar_arena.core.settings import settings

    monkeypatch.setattr(settings, "database_url", None)
    with pytest.raises(SystemExit):
        main([])

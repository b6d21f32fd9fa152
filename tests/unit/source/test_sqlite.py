"""Tests for hitchsync.source.sqlite - read-only snapshot handle."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from hitchsync.protocols.source import SnapshotSource
from hitchsync.source.sqlite import SQLiteSnapshot


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.sqlite"
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE points (id INTEGER PRIMARY KEY, name TEXT)")
    conn.executemany("INSERT INTO points VALUES (?, ?)", [(1, "a"), (2, "b")])
    conn.commit()
    conn.close()
    return path


class TestSQLiteSnapshot:
    """Tests for SQLiteSnapshot."""

    def test_implements_protocol(self, db_path: Path) -> None:
        assert isinstance(SQLiteSnapshot(db_path), SnapshotSource)

    def test_query_yields_dicts(self, db_path: Path) -> None:
        with SQLiteSnapshot(db_path) as snapshot:
            rows = list(snapshot.query("SELECT id, name FROM points ORDER BY id"))
        assert rows == [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]

    def test_query_params(self, db_path: Path) -> None:
        with SQLiteSnapshot(db_path) as snapshot:
            rows = list(snapshot.query("SELECT name FROM points WHERE id > ?", (1,)))
        assert rows == [{"name": "b"}]

    def test_open_close(self, db_path: Path) -> None:
        snapshot = SQLiteSnapshot(str(db_path))
        assert snapshot.path == db_path
        assert not snapshot.is_open
        snapshot.open()
        snapshot.open()
        assert snapshot.is_open
        snapshot.close()
        snapshot.close()
        assert not snapshot.is_open

    def test_query_before_open(self, db_path: Path) -> None:
        with pytest.raises(RuntimeError, match="not opened"):
            list(SQLiteSnapshot(db_path).query("SELECT 1"))

    def test_read_only(self, db_path: Path) -> None:
        with SQLiteSnapshot(db_path) as snapshot:
            with pytest.raises(sqlite3.OperationalError):
                list(snapshot.query("DELETE FROM points"))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(sqlite3.OperationalError):
            SQLiteSnapshot(tmp_path / "missing.sqlite").open()
        assert not (tmp_path / "missing.sqlite").exists()

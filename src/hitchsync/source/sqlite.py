"""SQLite snapshot access.

The Hitchwiki dump is a single SQLite file. It is opened read-only; this
package never writes to the snapshot.

Example:
    >>> from hitchsync.source.sqlite import SQLiteSnapshot
    >>>
    >>> with SQLiteSnapshot("/tmp/hitchwiki.sqlite") as snapshot:
    ...     rows = list(snapshot.query("SELECT id FROM points LIMIT 1"))
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any


class SQLiteSnapshot:
    """Read-only handle on a downloaded SQLite snapshot.

    Args:
        path: Snapshot file path.
        timeout: Lock timeout in seconds (default 30).
    """

    def __init__(self, path: str | Path, *, timeout: float = 30.0) -> None:
        self._path = Path(path)
        self._timeout = timeout
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> None:
        """Open the snapshot.

        Raises:
            sqlite3.Error: If the file is missing or not a database.
        """
        if self._conn is not None:
            return
        uri = f"{self._path.resolve().as_uri()}?mode=ro"
        conn = sqlite3.connect(uri, uri=True, timeout=self._timeout)
        conn.row_factory = sqlite3.Row
        self._conn = conn

    def query(self, sql: str, params: Sequence[Any] = ()) -> Iterator[Mapping[str, Any]]:
        """Run a query, yielding rows as dicts.

        Rows are fetched lazily from the cursor; the iterator is one-shot.
        """
        if self._conn is None:
            raise RuntimeError("Snapshot not opened. Call open() first.")
        cursor = self._conn.execute(sql, tuple(params))
        try:
            for row in cursor:
                yield dict(row)
        finally:
            cursor.close()

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> SQLiteSnapshot:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["SQLiteSnapshot"]

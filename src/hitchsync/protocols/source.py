"""Snapshot protocols.

`SnapshotFetcher` brings the published dataset to local storage;
`SnapshotSource` queries the local copy.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SnapshotFetcher(Protocol):
    """Downloads the full dataset snapshot."""

    async def fetch(self, url: str, dest: Path) -> Path:
        """Download ``url`` to ``dest`` and return the local path."""
        ...


@runtime_checkable
class SnapshotSource(Protocol):
    """Read access to a downloaded snapshot.

    See Also:
        hitchsync.source.sqlite.SQLiteSnapshot: SQLite dump implementation
    """

    def open(self) -> None:
        """Open the snapshot for querying."""
        ...

    def query(self, sql: str, params: Sequence[Any] = ()) -> Iterator[Mapping[str, Any]]:
        """Run a query in the snapshot's native language, yielding rows."""
        ...

    def close(self) -> None:
        """Release the snapshot handle."""
        ...

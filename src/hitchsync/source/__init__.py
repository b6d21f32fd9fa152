"""Snapshot access: download, read-only SQLite handle and row selection."""

from hitchsync.source.fetch import HttpSnapshotFetcher
from hitchsync.source.selector import SourceSelector, format_cutoff
from hitchsync.source.sqlite import SQLiteSnapshot

__all__ = [
    "HttpSnapshotFetcher",
    "SQLiteSnapshot",
    "SourceSelector",
    "format_cutoff",
]

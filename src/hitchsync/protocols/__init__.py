"""Capability protocols consumed by the sync core."""

from hitchsync.protocols.progress import (
    NullProgressReporter,
    ProgressEvent,
    ProgressReporter,
    ProgressStage,
)
from hitchsync.protocols.source import SnapshotFetcher, SnapshotSource
from hitchsync.protocols.store import DocumentStore

__all__ = [
    "DocumentStore",
    "NullProgressReporter",
    "ProgressEvent",
    "ProgressReporter",
    "ProgressStage",
    "SnapshotFetcher",
    "SnapshotSource",
]

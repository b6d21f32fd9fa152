"""
hitchsync - Incremental Hitchwiki to Firestore spot sync.

hitchsync copies community-rated hitchhiking spots from the published
Hitchwiki dump into the app's Firestore ``hitching-spots`` collection,
one bounded pass at a time.

Key Features:
- Watermark read back from the target store (no local state)
- Oldest-first selection, so an interrupted pass never leaves gaps
- Idempotent upserts keyed by provenance and source id
- Write budget per pass to stay within the free tier

Quick Start:
    >>> from hitchsync import SyncOrchestrator, MemoryDocumentStore, get_settings
    >>> settings = get_settings(store_backend="memory", snapshot_path="dump.sqlite")
    >>> orchestrator = SyncOrchestrator(settings, MemoryDocumentStore())
    >>> # result = await orchestrator.run_pass()
"""

# Configuration and errors
from hitchsync.core.config import FirebaseSettings, Settings, get_firebase_settings, get_settings
from hitchsync.core.exceptions import (
    ConfigurationError,
    HitchSyncError,
    SourceQueryError,
    StoreError,
    SyncError,
    TransformError,
    TransportError,
    WatermarkReadError,
    WriteError,
)

# Pass components
from hitchsync.core.orchestrator import SyncOrchestrator
from hitchsync.core.watermark import WatermarkResolver
from hitchsync.source.selector import SourceSelector
from hitchsync.transform import RowTransformer
from hitchsync.writer import BoundedWriter, WriteReport

# Models
from hitchsync.models.base import EPOCH
from hitchsync.models.spot import GeoPoint, SourceRecord, TargetRecord
from hitchsync.models.sync_pass import PassResult, PassStatus

# Capabilities
from hitchsync.protocols import (
    DocumentStore,
    NullProgressReporter,
    ProgressEvent,
    ProgressReporter,
    ProgressStage,
    SnapshotFetcher,
    SnapshotSource,
)
from hitchsync.reporter import SimpleProgressReporter
from hitchsync.source.fetch import HttpSnapshotFetcher
from hitchsync.source.sqlite import SQLiteSnapshot
from hitchsync.store import FirestoreRestStore, MemoryDocumentStore, create_store

# HTTP utilities
from hitchsync.http import DownloadError, HttpClient, HttpClientError, RateLimiter

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "FirebaseSettings",
    "Settings",
    "get_firebase_settings",
    "get_settings",
    # Errors
    "ConfigurationError",
    "HitchSyncError",
    "SourceQueryError",
    "StoreError",
    "SyncError",
    "TransformError",
    "TransportError",
    "WatermarkReadError",
    "WriteError",
    # Pass components
    "BoundedWriter",
    "RowTransformer",
    "SourceSelector",
    "SyncOrchestrator",
    "WatermarkResolver",
    "WriteReport",
    # Models
    "EPOCH",
    "GeoPoint",
    "PassResult",
    "PassStatus",
    "SourceRecord",
    "TargetRecord",
    # Capabilities
    "DocumentStore",
    "FirestoreRestStore",
    "HttpSnapshotFetcher",
    "MemoryDocumentStore",
    "NullProgressReporter",
    "ProgressEvent",
    "ProgressReporter",
    "ProgressStage",
    "SQLiteSnapshot",
    "SimpleProgressReporter",
    "SnapshotFetcher",
    "SnapshotSource",
    "create_store",
    # HTTP
    "DownloadError",
    "HttpClient",
    "HttpClientError",
    "RateLimiter",
    # Version
    "__version__",
]

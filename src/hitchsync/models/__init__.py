"""Pydantic models for hitchsync."""

from hitchsync.models.base import EPOCH, DocumentModel, HitchSyncModel, ensure_utc, utc_now
from hitchsync.models.spot import GeoPoint, GuestUser, SourceRecord, SourceRef, TargetRecord
from hitchsync.models.sync_pass import PassResult, PassStatus

__all__ = [
    # Base
    "EPOCH",
    "DocumentModel",
    "HitchSyncModel",
    "ensure_utc",
    "utc_now",
    # Spots
    "GeoPoint",
    "GuestUser",
    "SourceRecord",
    "SourceRef",
    "TargetRecord",
    # Passes
    "PassResult",
    "PassStatus",
]

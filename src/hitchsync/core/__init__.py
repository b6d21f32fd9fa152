"""Core configuration and exceptions."""

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

__all__ = [
    # Configuration
    "FirebaseSettings",
    "Settings",
    "get_firebase_settings",
    "get_settings",
    # Exceptions
    "ConfigurationError",
    "HitchSyncError",
    "SourceQueryError",
    "StoreError",
    "SyncError",
    "TransformError",
    "TransportError",
    "WatermarkReadError",
    "WriteError",
]

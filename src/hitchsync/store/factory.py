"""Store factory - builds the configured target store.

Usage:
    from hitchsync.store import create_store

    # Firestore, credentials from FIREBASE_* environment variables
    store = create_store(get_settings())

    # Memory (dry runs, tests)
    store = create_store(get_settings(store_backend="memory"))
"""

from __future__ import annotations

import logging

from hitchsync.core.config import FirebaseSettings, Settings, get_firebase_settings
from hitchsync.core.exceptions import ConfigurationError
from hitchsync.http.client import HttpClient
from hitchsync.protocols.store import DocumentStore
from hitchsync.store.firestore import FirestoreRestStore
from hitchsync.store.memory import MemoryDocumentStore

logger = logging.getLogger(__name__)


def create_store(
    settings: Settings,
    firebase: FirebaseSettings | None = None,
    *,
    client: HttpClient | None = None,
) -> DocumentStore:
    """Create the target store named by ``settings.store_backend``.

    Args:
        settings: Application settings.
        firebase: Credentials; read from the environment when omitted.
        client: HTTP client for Firestore (built from settings when omitted).

    Raises:
        ConfigurationError: If Firestore credentials are incomplete.
    """
    if settings.store_backend == "memory":
        logger.info("Using in-memory store: nothing will be persisted")
        return MemoryDocumentStore()

    if settings.store_backend == "firestore":
        firebase = firebase or get_firebase_settings()
        if not firebase.is_complete:
            raise ConfigurationError(
                f"Missing Firebase configuration: {', '.join(firebase.missing())}"
            )
        logger.info("Connecting to firebase project %s", firebase.project_id)
        client = client or HttpClient(
            rate_limit=settings.write_rate_limit,
            timeout=settings.request_timeout,
        )
        return FirestoreRestStore(firebase.project_id, firebase.api_key, client)

    raise ConfigurationError(f"Unknown store backend: {settings.store_backend}")


__all__ = ["create_store"]

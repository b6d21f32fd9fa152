"""Target document stores."""

from hitchsync.store.factory import create_store
from hitchsync.store.firestore import FirestoreRestStore
from hitchsync.store.memory import MemoryDocumentStore

__all__ = [
    "FirestoreRestStore",
    "MemoryDocumentStore",
    "create_store",
]

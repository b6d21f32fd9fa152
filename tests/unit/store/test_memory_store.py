"""Tests for hitchsync.store.memory - MemoryDocumentStore.

The memory store is the reference DocumentStore implementation and backs
dry runs and the orchestrator tests.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from hitchsync.protocols.store import DocumentStore
from hitchsync.store.memory import MemoryDocumentStore, get_path

COLLECTION = "hitching-spots"


def make_doc(source_type: str = "hitchwiki", submitted: datetime | None = None) -> dict[str, Any]:
    return {
        "rating": 2,
        "submittedTimestamp": submitted,
        "source": {"type": source_type, "id": "1"},
    }


@pytest.fixture
async def store() -> MemoryDocumentStore:
    s = MemoryDocumentStore()
    await s.initialize()
    yield s
    await s.close()


# =============================================================================
# Basic operations
# =============================================================================


class TestMemoryDocumentStore:
    """Tests for upsert and get."""

    def test_implements_protocol(self) -> None:
        assert isinstance(MemoryDocumentStore(), DocumentStore)

    async def test_upsert_and_get(self, store: MemoryDocumentStore) -> None:
        await store.upsert(COLLECTION, "hitchwiki-1", {"rating": 2})
        assert await store.get(COLLECTION, "hitchwiki-1") == {"rating": 2}
        assert await store.get(COLLECTION, "missing") is None

    async def test_upsert_replaces_whole_document(self, store: MemoryDocumentStore) -> None:
        await store.upsert(COLLECTION, "d", {"a": 1, "b": 2})
        await store.upsert(COLLECTION, "d", {"a": 3})
        assert await store.get(COLLECTION, "d") == {"a": 3}
        assert store.count(COLLECTION) == 1
        assert store.write_count == 2

    async def test_collections_are_separate(self, store: MemoryDocumentStore) -> None:
        await store.upsert("one", "d", {"a": 1})
        assert store.count("one") == 1
        assert store.count("two") == 0

    async def test_documents_are_copied(self, store: MemoryDocumentStore) -> None:
        doc = {"source": {"type": "hitchwiki"}}
        await store.upsert(COLLECTION, "d", doc)
        doc["source"]["type"] = "changed"
        fetched = await store.get(COLLECTION, "d")
        fetched["source"]["type"] = "changed again"
        assert store.documents(COLLECTION)["d"]["source"]["type"] == "hitchwiki"

    async def test_close_keeps_data(self, store: MemoryDocumentStore) -> None:
        await store.upsert(COLLECTION, "d", {"a": 1})
        await store.close()
        await store.initialize()
        assert store.count(COLLECTION) == 1

    async def test_clear(self, store: MemoryDocumentStore) -> None:
        await store.upsert(COLLECTION, "d", {"a": 1})
        store.clear()
        assert store.count(COLLECTION) == 0
        assert store.write_count == 0


# =============================================================================
# query_latest
# =============================================================================


class TestQueryLatest:
    """Tests for the newest-by-submittedTimestamp query."""

    async def test_empty(self, store: MemoryDocumentStore) -> None:
        assert await store.query_latest(COLLECTION, "hitchwiki") is None

    async def test_returns_newest(self, store: MemoryDocumentStore) -> None:
        await store.upsert(COLLECTION, "a", make_doc(submitted=datetime(2021, 1, 2, tzinfo=UTC)))
        await store.upsert(COLLECTION, "b", make_doc(submitted=datetime(2021, 1, 3, tzinfo=UTC)))
        await store.upsert(COLLECTION, "c", make_doc(submitted=datetime(2021, 1, 1, tzinfo=UTC)))

        latest = await store.query_latest(COLLECTION, "hitchwiki")
        assert latest is not None
        assert latest["submittedTimestamp"] == datetime(2021, 1, 3, tzinfo=UTC)

    async def test_filters_by_provenance(self, store: MemoryDocumentStore) -> None:
        await store.upsert(
            COLLECTION, "app-1", make_doc("app", submitted=datetime(2030, 1, 1, tzinfo=UTC))
        )
        await store.upsert(COLLECTION, "user-1", {"submittedTimestamp": datetime(2031, 1, 1)})
        await store.upsert(
            COLLECTION, "hw-1", make_doc(submitted=datetime(2021, 1, 1, tzinfo=UTC))
        )

        latest = await store.query_latest(COLLECTION, "hitchwiki")
        assert latest is not None
        assert latest["submittedTimestamp"] == datetime(2021, 1, 1, tzinfo=UTC)

    async def test_ignores_documents_without_timestamp(self, store: MemoryDocumentStore) -> None:
        await store.upsert(COLLECTION, "a", make_doc(submitted=None))
        assert await store.query_latest(COLLECTION, "hitchwiki") is None


class TestGetPath:
    """Tests for get_path()."""

    def test_nested(self) -> None:
        assert get_path({"a": {"b": {"c": 1}}}, "a.b.c") == 1

    def test_missing_or_not_a_mapping(self) -> None:
        assert get_path({"a": 1}, "a.b") is None
        assert get_path({"a": {}}, "a.b") is None

"""Firestore document store over the REST API.

Talks to ``firestore.googleapis.com`` with the project's web API key, the
same credentials the app's web client uses. Access is governed by the
project's security rules.

Firestore's REST API wraps every value in a typed envelope
(``{"stringValue": "x"}``, ``{"geoPointValue": {...}}``, ...);
`encode_fields` and `decode_fields` translate between those envelopes and
plain Python values.

Example:
    >>> from hitchsync.store.firestore import decode_value, encode_value
    >>> encode_value(3)
    {'integerValue': '3'}
    >>> decode_value({"mapValue": {"fields": {"type": {"stringValue": "guest"}}}})
    {'type': 'guest'}
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any
from urllib.parse import quote

from hitchsync.core.exceptions import StoreError
from hitchsync.http.client import HttpClient, HttpClientError
from hitchsync.models.base import ensure_utc
from hitchsync.models.spot import GeoPoint

logger = logging.getLogger(__name__)

FIRESTORE_URL = "https://firestore.googleapis.com/v1"

_FRACTION = re.compile(r"\.(\d{6})\d+")


# =============================================================================
# Value codec
# =============================================================================


def format_timestamp(value: datetime) -> str:
    """RFC 3339 in UTC with a ``Z`` suffix."""
    return ensure_utc(value).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def parse_timestamp(text: str) -> datetime:
    """Parse a Firestore timestamp; nanoseconds are truncated to microseconds."""
    text = _FRACTION.sub(r".\1", text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))


def encode_value(value: Any) -> dict[str, Any]:
    """Wrap a Python value in its Firestore envelope."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": format_timestamp(value)}
    if isinstance(value, GeoPoint):
        return {"geoPointValue": {"latitude": value.latitude, "longitude": value.longitude}}
    if isinstance(value, Mapping):
        return {"mapValue": {"fields": encode_fields(value)}}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    raise TypeError(f"Cannot store value of type {type(value).__name__}")


def decode_value(envelope: Mapping[str, Any]) -> Any:
    """Unwrap a Firestore envelope into a Python value."""
    if "nullValue" in envelope:
        return None
    if "booleanValue" in envelope:
        return bool(envelope["booleanValue"])
    if "integerValue" in envelope:
        return int(envelope["integerValue"])
    if "doubleValue" in envelope:
        return float(envelope["doubleValue"])
    if "stringValue" in envelope:
        return envelope["stringValue"]
    if "timestampValue" in envelope:
        return parse_timestamp(envelope["timestampValue"])
    if "geoPointValue" in envelope:
        point = envelope["geoPointValue"]
        # zero coordinates are omitted on the wire
        return GeoPoint(latitude=point.get("latitude", 0.0), longitude=point.get("longitude", 0.0))
    if "mapValue" in envelope:
        return decode_fields(envelope["mapValue"].get("fields", {}))
    if "arrayValue" in envelope:
        return [decode_value(v) for v in envelope["arrayValue"].get("values", [])]
    if "referenceValue" in envelope:
        return envelope["referenceValue"]
    if "bytesValue" in envelope:
        return envelope["bytesValue"]
    raise ValueError(f"Unknown Firestore value: {sorted(envelope)}")


def encode_fields(document: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key): encode_value(value) for key, value in document.items()}


def decode_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {key: decode_value(value) for key, value in fields.items()}


# =============================================================================
# Store
# =============================================================================


class FirestoreRestStore:
    """Target document store backed by Cloud Firestore.

    Args:
        project_id: Firebase project id.
        api_key: Web API key sent as the ``key`` query parameter.
        client: HTTP client; its rate limit throttles writes.
        database: Firestore database id.

    Example:
        >>> from hitchsync.http import HttpClient
        >>> store = FirestoreRestStore("my-project", "api-key", HttpClient(rate_limit=5.0))
        >>> store.documents_url
        'https://firestore.googleapis.com/v1/projects/my-project/databases/(default)/documents'
    """

    def __init__(
        self,
        project_id: str,
        api_key: str,
        client: HttpClient,
        *,
        database: str = "(default)",
    ) -> None:
        self._project_id = project_id
        self._api_key = api_key
        self._client = client
        self._database = database

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def documents_url(self) -> str:
        return f"{FIRESTORE_URL}/projects/{self._project_id}/databases/{self._database}/documents"

    async def initialize(self) -> None:
        """No-op: HTTP connections open on first request."""

    async def close(self) -> None:
        await self._client.close()

    def _document_url(self, collection: str, doc_id: str) -> str:
        return f"{self.documents_url}/{quote(collection, safe='')}/{quote(doc_id, safe='')}"

    async def upsert(self, collection: str, doc_id: str, document: Mapping[str, Any]) -> None:
        """Create or overwrite a document.

        A PATCH without an update mask replaces every field, so the
        resulting document does not depend on what was stored before.
        """
        try:
            body = {"fields": encode_fields(document)}
        except TypeError as e:
            raise StoreError(f"Cannot encode {collection}/{doc_id}: {e}") from e
        try:
            await self._client.request(
                "PATCH",
                self._document_url(collection, doc_id),
                params={"key": self._api_key},
                json=body,
            )
        except HttpClientError as e:
            raise StoreError(f"Firestore write to {collection}/{doc_id} failed: {e}") from e

    async def query_latest(self, collection: str, provenance_tag: str) -> dict[str, Any] | None:
        """Run the single-document descending query for a provenance type."""
        query = {
            "structuredQuery": {
                "from": [{"collectionId": collection}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": "source.type"},
                        "op": "EQUAL",
                        "value": {"stringValue": provenance_tag},
                    }
                },
                "orderBy": [
                    {"field": {"fieldPath": "submittedTimestamp"}, "direction": "DESCENDING"}
                ],
                "limit": 1,
            }
        }
        logger.debug("Querying latest %s document in %s", provenance_tag, collection)
        try:
            results = await self._client.request_json(
                "POST",
                f"{self.documents_url}:runQuery",
                params={"key": self._api_key},
                json=query,
            )
        except HttpClientError as e:
            raise StoreError(f"Firestore query on {collection} failed: {e}") from e

        for item in results or []:
            if "document" in item:
                try:
                    return decode_fields(item["document"].get("fields", {}))
                except ValueError as e:
                    raise StoreError(f"Cannot decode document from {collection}: {e}") from e
        return None


__all__ = [
    "FIRESTORE_URL",
    "FirestoreRestStore",
    "decode_fields",
    "decode_value",
    "encode_fields",
    "encode_value",
    "format_timestamp",
    "parse_timestamp",
]

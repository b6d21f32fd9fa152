"""Snapshot download."""

from __future__ import annotations

import logging
from pathlib import Path

from hitchsync.core.exceptions import TransportError
from hitchsync.http.client import DownloadError, HttpClient

logger = logging.getLogger(__name__)


class HttpSnapshotFetcher:
    """Downloads the published snapshot over HTTP.

    Example:
        >>> from hitchsync.http import HttpClient
        >>> fetcher = HttpSnapshotFetcher(HttpClient(timeout=120.0))
        >>> # path = await fetcher.fetch(DUMP_URL, SNAPSHOT_PATH)
    """

    def __init__(self, client: HttpClient) -> None:
        self._client = client

    async def fetch(self, url: str, dest: Path) -> Path:
        """Download ``url`` to ``dest``, replacing any previous snapshot.

        Raises:
            TransportError: If the download fails. A previous snapshot at
                ``dest`` is left untouched.
        """
        logger.info("Downloading file from %s to %s", url, dest)
        try:
            path = await self._client.download(url, dest)
        except DownloadError as e:
            raise TransportError(str(e)) from e
        logger.debug("Downloaded %s bytes", path.stat().st_size)
        return path

    async def close(self) -> None:
        await self._client.close()


__all__ = ["HttpSnapshotFetcher"]

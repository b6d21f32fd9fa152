"""hitchsync configuration.

Application settings loaded from environment variables (or a ``.env``
file) with the HITCHSYNC_ prefix. Target store credentials use the
FIREBASE_ prefix.

Example:
    >>> from hitchsync.core.config import get_settings
    >>> settings = get_settings(max_writes=500)
    >>> settings.max_writes
    500
    >>> settings.collection
    'hitching-spots'
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DUMP_URL = "https://hitchmap.com/dump.sqlite"
SNAPSHOT_PATH = Path(tempfile.gettempdir()) / "hitchwiki.sqlite"

# Stay within the target store's daily free write tier.
MAX_WRITES = 10000


class Settings(BaseSettings):
    """Application settings.

    Example:
        >>> from hitchsync.core.config import Settings
        >>> s = Settings(store_backend="memory")
        >>> s.provenance_tag, s.rating_floor
        ('hitchwiki', 2)
    """

    model_config = SettingsConfigDict(
        env_prefix="HITCHSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Source
    dump_url: str = Field(default=DUMP_URL, description="Snapshot download URL")
    snapshot_path: Path = Field(default=SNAPSHOT_PATH, description="Local snapshot file")
    request_timeout: float = Field(default=60.0, ge=1.0)

    # Target
    store_backend: Literal["firestore", "memory"] = Field(default="firestore")
    collection: str = Field(default="hitching-spots", min_length=1)
    provenance_tag: str = Field(default="hitchwiki", min_length=1)
    max_writes: int = Field(default=MAX_WRITES, ge=1, description="Write budget per pass")
    write_rate_limit: float | None = Field(
        default=None,
        gt=0.0,
        description="Maximum target store requests per second",
    )

    # Selection and mapping
    rating_floor: int = Field(default=2, ge=0, le=5, description="Only ratings above this")
    rating_offset: int = Field(default=2, description="Subtracted from source ratings")
    name_marker: str = Field(default="(Hitchwiki)", description="Stripped from author names")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["rich", "plain"] = Field(default="rich")


class FirebaseSettings(BaseSettings):
    """Target store credentials.

    Example:
        >>> from hitchsync.core.config import FirebaseSettings
        >>> FirebaseSettings(api_key="k", auth_domain="d", project_id="p").is_complete
        True
    """

    model_config = SettingsConfigDict(
        env_prefix="FIREBASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str | None = None
    auth_domain: str | None = None
    project_id: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.api_key and self.auth_domain and self.project_id)

    def missing(self) -> list[str]:
        """Names of the unset environment variables."""
        return [
            f"FIREBASE_{name.upper()}"
            for name in ("api_key", "auth_domain", "project_id")
            if not getattr(self, name)
        ]


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides."""
    return Settings(**overrides)


def get_firebase_settings(**overrides: Any) -> FirebaseSettings:
    """Get target store credentials with optional overrides."""
    return FirebaseSettings(**overrides)

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .domain.constants import StorageBackend


@dataclass(slots=True)
class TokenCacheSettings:
    """
    Storage + logging settings for one account's token cache.

    Host code decides how to construct this (env, config file, etc.).
    """
    account_name: str
    storage_backend: str = StorageBackend.FILE.value

    # File backend
    file_path: str = "tokens.db"

    # Mongo backend
    mongo_uri: Optional[str] = None
    mongo_db: str = "session_cache"
    mongo_collection: str = "tokens"

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"

    @property
    def backend(self) -> StorageBackend:
        return StorageBackend(self.storage_backend.strip().lower())

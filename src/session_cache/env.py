from __future__ import annotations

import os
from typing import Optional

from .domain.constants import StorageBackend
from .domain.exceptions import ConfigurationError
from .settings import TokenCacheSettings


def settings_from_env(account_name: Optional[str] = None) -> TokenCacheSettings:
    """
    Build TokenCacheSettings from SESSION_CACHE_* environment variables.

    `account_name` overrides SESSION_CACHE_ACCOUNT_NAME when given.
    """
    def _get(key: str, default: Optional[str] = None) -> Optional[str]:
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return default
        return raw.strip()

    account = account_name or _get("SESSION_CACHE_ACCOUNT_NAME")
    backend_raw = (_get("SESSION_CACHE_BACKEND") or StorageBackend.FILE.value).lower()
    mongo_uri = _get("SESSION_CACHE_MONGO_URI")

    problems: list[str] = []
    if not account:
        problems.append("SESSION_CACHE_ACCOUNT_NAME is not set")

    valid_backends = {b.value for b in StorageBackend}
    if backend_raw not in valid_backends:
        problems.append(
            f"SESSION_CACHE_BACKEND must be one of {sorted(valid_backends)}, got {backend_raw!r}"
        )
    elif backend_raw == StorageBackend.MONGO.value and not mongo_uri:
        problems.append("SESSION_CACHE_MONGO_URI is required for the mongo backend")

    if problems:
        raise ConfigurationError(f"Invalid session cache settings: {'; '.join(problems)}")

    return TokenCacheSettings(
        account_name=account,
        storage_backend=backend_raw,
        file_path=_get("SESSION_CACHE_FILE_PATH", "tokens.db"),
        mongo_uri=mongo_uri,
        mongo_db=_get("SESSION_CACHE_MONGO_DB", "session_cache"),
        mongo_collection=_get("SESSION_CACHE_MONGO_COLLECTION", "tokens"),
        log_level=_get("SESSION_CACHE_LOG_LEVEL", "INFO"),
        log_format=_get("SESSION_CACHE_LOG_FORMAT", "text"),
    )

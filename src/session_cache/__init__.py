"""
session_cache

Session-credential cache: keeps one reusable login token per account,
checks the token's embedded expiry before reuse and lets a rejected
login force re-authentication.
"""

__version__ = "0.1.0"

from .domain.entities import TokenRecord, DecodedClaims
from .domain.constants import StorageBackend
from .domain.exceptions import (
    TokenCacheError,
    MalformedTokenError,
    StoreIOError,
    ConfigurationError,
)
from .domain.ports import TokenDecoder, TokenStorage
from .domain.validity import is_still_valid, format_valid_until

from .application.use_cases.get_reusable_token import GetReusableTokenUseCase
from .application.use_cases.save_token import SaveTokenUseCase
from .application.use_cases.invalidate_token import InvalidateTokenUseCase

from .adapters.jwt.decoder import UnverifiedJWTDecoder
from .adapters.memory.storage import InMemoryTokenStorage
from .adapters.file.storage import JSONFileTokenStorage
from .adapters.mongo.storage import MongoTokenStorage

from .settings import TokenCacheSettings
from .env import settings_from_env
from .integrations.common.token_store import (
    TokenStore,
    create_token_store,
    create_token_store_from_settings,
)

__all__ = [
    "__version__",
    # domain core
    "TokenRecord",
    "DecodedClaims",
    "StorageBackend",
    "TokenDecoder",
    "TokenStorage",
    "is_still_valid",
    "format_valid_until",
    # exceptions
    "TokenCacheError",
    "MalformedTokenError",
    "StoreIOError",
    "ConfigurationError",
    # use cases
    "GetReusableTokenUseCase",
    "SaveTokenUseCase",
    "InvalidateTokenUseCase",
    # adapters
    "UnverifiedJWTDecoder",
    "InMemoryTokenStorage",
    "JSONFileTokenStorage",
    "MongoTokenStorage",
    # wiring
    "TokenCacheSettings",
    "settings_from_env",
    "TokenStore",
    "create_token_store",
    "create_token_store_from_settings",
]

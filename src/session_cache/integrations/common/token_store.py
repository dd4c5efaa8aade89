from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Set

from ...adapters.file.storage import JSONFileTokenStorage
from ...adapters.jwt.decoder import UnverifiedJWTDecoder
from ...adapters.memory.storage import InMemoryTokenStorage
from ...adapters.mongo.storage import MongoTokenStorage
from ...application.use_cases.get_reusable_token import GetReusableTokenUseCase
from ...application.use_cases.invalidate_token import InvalidateTokenUseCase
from ...application.use_cases.save_token import SaveTokenUseCase
from ...domain.constants import StorageBackend
from ...domain.entities import TokenRecord
from ...domain.ports import TokenDecoder, TokenStorage
from ...domain.validity import current_time_ms
from ...settings import TokenCacheSettings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TokenStore:
    """
    Per-account session token cache.

    Binds one account name and one storage handle to the three
    operations the login flow needs:

    - get_reusable_token(): call before logging in
    - save_token(token):    call after a login issued a new token
    - invalidate_token():   call when the login service rejected the token

    Writes are fire-and-forget: they return an asyncio.Task resolving to
    True/False that callers may await or ignore. They must be called from
    within a running event loop.
    """

    account_name: str
    storage: TokenStorage
    get_use_case: GetReusableTokenUseCase
    save_use_case: SaveTokenUseCase
    invalidate_use_case: InvalidateTokenUseCase
    close_storage: bool = False

    _pending: Set[asyncio.Task[bool]] = field(default_factory=set, init=False, repr=False)

    # --- Core operations --------------------------------------------------

    async def get_reusable_token(self) -> Optional[str]:
        """Stored token if still valid, else None (never raises for storage/decode errors)."""
        return await self.get_use_case.execute(self.account_name)

    def save_token(self, token: str) -> asyncio.Task[bool]:
        record = TokenRecord(account_name=self.account_name, token=token)
        return self._schedule(self.save_use_case.execute(record))

    def invalidate_token(self) -> asyncio.Task[bool]:
        return self._schedule(self.invalidate_use_case.execute(self.account_name))

    async def aclose(self) -> None:
        """Wait for pending writes, then release the storage if we own it."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

        if self.close_storage:
            self.storage.close()

    # --- Internal ---------------------------------------------------------

    def _schedule(self, coro) -> asyncio.Task[bool]:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task


def create_token_store(
        account_name: str,
        storage: TokenStorage,
        *,
        decoder: TokenDecoder | None = None,
        clock: Callable[[], int] | None = None,
        close_storage: bool = False,
) -> TokenStore:
    """
    Wire the use cases around a given storage and return the facade.

    `clock` returns the current unix time in milliseconds.
    """
    token_decoder: TokenDecoder = decoder or UnverifiedJWTDecoder()

    return TokenStore(
        account_name=account_name,
        storage=storage,
        get_use_case=GetReusableTokenUseCase(
            storage=storage,
            token_decoder=token_decoder,
            clock=clock or current_time_ms,
        ),
        save_use_case=SaveTokenUseCase(storage=storage),
        invalidate_use_case=InvalidateTokenUseCase(storage=storage),
        close_storage=close_storage,
    )


def create_token_store_from_settings(settings: TokenCacheSettings) -> TokenStore:
    """
    High-level factory: TokenCacheSettings -> TokenStore.

    - builds the configured storage backend
    - wires decoder + use cases
    """
    storage: TokenStorage
    if settings.backend is StorageBackend.MONGO:
        storage = MongoTokenStorage.from_uri(
            settings.mongo_uri or "",
            settings.mongo_db,
            settings.mongo_collection,
        )
    elif settings.backend is StorageBackend.FILE:
        storage = JSONFileTokenStorage(settings.file_path)
    else:
        storage = InMemoryTokenStorage()

    logger.debug(f"[{settings.account_name}] Using '{settings.backend.value}' token storage")

    return create_token_store(
        settings.account_name,
        storage,
        close_storage=True,
    )

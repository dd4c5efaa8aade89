from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from ...domain.constants import ACCOUNT_FIELD
from ...domain.exceptions import StoreIOError
from ...domain.ports import TokenStorage

logger = logging.getLogger(__name__)


class MongoTokenStorage(TokenStorage):
    """
    Adapter implementing TokenStorage port on a MongoDB collection via Motor.

    - one document per account, keyed by `accountName`
    - every driver error surfaces as StoreIOError
    """

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        client: Optional[AsyncIOMotorClient] = None,
    ) -> None:
        self._collection = collection
        self._client = client
        self._indexes_ready = False

    @classmethod
    def from_uri(
        cls,
        uri: str,
        database: str,
        collection: str,
        **client_kwargs: Any,
    ) -> MongoTokenStorage:
        client_kwargs.setdefault("serverSelectionTimeoutMS", 10000)
        client: AsyncIOMotorClient = AsyncIOMotorClient(uri, **client_kwargs)
        return cls(client[database][collection], client=client)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    async def ensure_indexes(self) -> None:
        """Create the unique account index. Runs once, before the first write."""
        try:
            await self._collection.create_index(ACCOUNT_FIELD, unique=True, name="u_account_name")
        except PyMongoError as exc:
            logger.warning(f"Could not create unique index on '{ACCOUNT_FIELD}': {exc}")
            return
        self._indexes_ready = True

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    async def find_one(self, filter: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
        try:
            return await self._collection.find_one(dict(filter), projection={"_id": False})
        except PyMongoError as exc:
            raise StoreIOError(f"find_one failed: {exc}") from exc

    async def update(self, filter: Mapping[str, Any], values: Mapping[str, Any], *, upsert: bool = True) -> None:
        if not self._indexes_ready:
            await self.ensure_indexes()

        try:
            await self._collection.update_one(dict(filter), {"$set": dict(values)}, upsert=upsert)
        except PyMongoError as exc:
            raise StoreIOError(f"update failed: {exc}") from exc

    async def remove(self, filter: Mapping[str, Any], *, multi: bool = True) -> int:
        try:
            if multi:
                result = await self._collection.delete_many(dict(filter))
            else:
                result = await self._collection.delete_one(dict(filter))
        except PyMongoError as exc:
            raise StoreIOError(f"remove failed: {exc}") from exc
        return result.deleted_count

from __future__ import annotations

import logging
from dataclasses import dataclass

from ...domain.constants import ACCOUNT_FIELD, TOKEN_FIELD
from ...domain.entities import TokenRecord
from ...domain.ports import TokenStorage

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SaveTokenUseCase:
    """
    Upsert the token of an account: overwrite the existing record or
    insert a new one. Repeated identical saves leave a single record.

    Returns True once persisted, False if the storage failed (logged).
    """

    storage: TokenStorage

    async def execute(self, record: TokenRecord) -> bool:
        extra = {"account_name": record.account_name}

        logger.debug(f"[{record.account_name}] Updating stored token...", extra=extra)

        try:
            await self.storage.update(
                {ACCOUNT_FIELD: record.account_name},
                {TOKEN_FIELD: record.token},
                upsert=True,
            )
        except Exception as exc:  # noqa: BLE001
            logger.error(f"[{record.account_name}] Failed to save token: {exc!r}", extra=extra)
            return False

        return True

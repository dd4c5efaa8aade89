from __future__ import annotations

import logging
from dataclasses import dataclass

from ...domain.constants import ACCOUNT_FIELD
from ...domain.ports import TokenStorage

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InvalidateTokenUseCase:
    """
    Remove every stored token of an account, so the next login attempt
    creates a new session. Meant for when the login service rejects the
    token that was used.

    Removing nothing is not an error.
    """

    storage: TokenStorage

    async def execute(self, account_name: str) -> bool:
        extra = {"account_name": account_name}

        logger.debug(f"[{account_name}] Removing stored token...", extra=extra)

        try:
            removed = await self.storage.remove({ACCOUNT_FIELD: account_name}, multi=True)
        except Exception as exc:  # noqa: BLE001
            logger.error(f"[{account_name}] Failed to invalidate token: {exc!r}", extra=extra)
            return False

        logger.debug(f"[{account_name}] Removed {removed} stored token(s)", extra=extra)
        return True

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from ...domain.constants import ACCOUNT_FIELD, TOKEN_FIELD
from ...domain.exceptions import MalformedTokenError, StoreIOError
from ...domain.ports import TokenDecoder, TokenStorage
from ...domain.validity import current_time_ms, format_valid_until, is_still_valid

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GetReusableTokenUseCase:
    """
    Application use case:
    - Look up the stored token of an account
    - Decode it via TokenDecoder port
    - Hand it back only while its expiry lies in the future

    Every failure degrades to None so the caller falls back to a fresh
    login. Nothing raised by the storage or the decoder crosses `execute`.
    """

    storage: TokenStorage
    token_decoder: TokenDecoder
    clock: Callable[[], int] = field(default=current_time_ms)  # unix ms

    async def execute(self, account_name: str) -> Optional[str]:
        extra = {"account_name": account_name}

        try:
            doc = await self.storage.find_one({ACCOUNT_FIELD: account_name})
        except StoreIOError as exc:
            logger.warning(
                f"[{account_name}] Database error! Failed to check for existing token, getting a new session. "
                f"Please report this issue if it keeps occurring!\nError: {exc}",
                extra=extra,
            )
            return None
        except Exception as exc:  # noqa: BLE001
            # third-party storages may not wrap their errors
            logger.warning(
                f"[{account_name}] Unexpected storage error while looking up token, getting a new session.\n"
                f"Error: {exc!r}",
                extra=extra,
            )
            return None

        if not doc:
            logger.info(
                f"[{account_name}] No token found. Logging in with credentials to get a new session...",
                extra=extra,
            )
            return None

        token = doc.get(TOKEN_FIELD)
        try:
            claims = self.token_decoder.decode(token)
        except MalformedTokenError as exc:
            # Left in place: the next successful login overwrites it anyway
            logger.error(
                f"[{account_name}] Failed to decode stored token! Please report this issue if it keeps "
                f"occurring! Getting a new session...\nError: {exc}",
                extra=extra,
            )
            return None

        valid_until = format_valid_until(claims)

        if is_still_valid(claims, self.clock()):
            logger.info(
                f"[{account_name}] Found valid token until '{valid_until}'. Logging in with it to reuse session...",
                extra=extra,
            )
            return token

        logger.info(
            f"[{account_name}] Found expired token. It was valid till '{valid_until}'. "
            f"Logging in with credentials to get a new session...",
            extra=extra,
        )
        return None

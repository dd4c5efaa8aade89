from __future__ import annotations

import time

from .constants import VALID_UNTIL_FORMAT
from .entities import DecodedClaims


def current_time_ms() -> int:
    return time.time_ns() // 1_000_000


def is_still_valid(claims: DecodedClaims, now_ms: int) -> bool:
    """
    True while the expiry lies strictly in the future.

    A token expiring exactly at `now_ms` is already considered expired.
    """
    return claims.expires_at_unix_seconds * 1000 > now_ms


def format_valid_until(claims: DecodedClaims) -> str:
    """Human-readable expiry, e.g. '2024-10-19 14:25:03 (GMT time)'."""
    try:
        return f"{claims.expires_at.strftime(VALID_UNTIL_FORMAT)} (GMT time)"
    except (OverflowError, OSError, ValueError):
        # outside the range datetime can represent
        return f"{claims.expires_at_unix_seconds} (unix time)"

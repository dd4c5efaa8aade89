from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from .constants import ACCOUNT_FIELD, TOKEN_FIELD


@dataclass(slots=True)
class TokenRecord:
    """
    The one persisted login token of an account.

    `account_name` is the lookup key; the store keeps at most one live
    record per key.
    """
    account_name: str
    token: str

    def to_document(self) -> dict[str, str]:
        return {ACCOUNT_FIELD: self.account_name, TOKEN_FIELD: self.token}

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> TokenRecord:
        return cls(account_name=doc[ACCOUNT_FIELD], token=doc[TOKEN_FIELD])


@dataclass(frozen=True, slots=True)
class DecodedClaims:
    """
    Claims read from a token payload. Never persisted.
    """
    expires_at_unix_seconds: int | float
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.expires_at_unix_seconds, tz=timezone.utc)

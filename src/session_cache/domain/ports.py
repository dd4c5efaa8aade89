from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .entities import DecodedClaims


class TokenDecoder(Protocol):
    """
    Port for reading the claims of a stored token.

    Implementations live in the adapters layer (e.g. unverified JWT decoder).
    """

    def decode(self, token: str) -> DecodedClaims:
        """
        Decode the given token payload.

        Does NOT verify the signature; only the expiry is of interest.
        Raises:
          - MalformedTokenError (and nothing else)
        """
        ...


class TokenStorage(Protocol):
    """
    Port for the durable key-value store holding one document per account.

    Filters and documents use the wire field names from `constants`.
    Implementations wrap their backend errors in StoreIOError.
    """

    async def find_one(self, filter: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
        ...

    async def update(self, filter: Mapping[str, Any], values: Mapping[str, Any], *, upsert: bool = True) -> None:
        ...

    async def remove(self, filter: Mapping[str, Any], *, multi: bool = True) -> int:
        ...

    def close(self) -> None:
        """Release connections / handles. May be a no-op."""
        ...

import json
import math
from typing import Any, Mapping, Optional

from jwt.utils import base64url_decode

from ...domain.constants import EXPIRY_CLAIM
from ...domain.entities import DecodedClaims
from ...domain.exceptions import MalformedTokenError
from ...domain.ports import TokenDecoder


class UnverifiedJWTDecoder(TokenDecoder):
    """
    Adapter implementing TokenDecoder port using PyJWT's base64url helpers.

    Infrastructure layer:
    - Knows about the compact JWT structure (header.payload.signature).
    - Reads only the payload segment. Header and signature are NOT looked
      at: the login service is the signing authority, this cache only
      judges freshness.
    """

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def decode(self, token: str) -> DecodedClaims:
        """
        Decode the payload segment of a JWT.

        Returns:
            DecodedClaims carrying the `exp` claim.

        Raises:
            MalformedTokenError
        """
        if not isinstance(token, str):
            raise MalformedTokenError(f"Token must be a string, got {type(token).__name__}")

        parts = token.split(".")
        if len(parts) != 3:
            raise MalformedTokenError(
                f"Token must consist of three dot-separated segments, got {len(parts)}"
            )

        try:
            # binascii.Error and UnicodeError are ValueError subclasses
            payload = json.loads(base64url_decode(parts[1]).decode("utf-8"))
        except (ValueError, TypeError) as exc:
            raise MalformedTokenError(f"Invalid token payload: {exc}") from exc

        if not isinstance(payload, dict):
            raise MalformedTokenError("Invalid token payload: must be a json object")

        return DecodedClaims(
            expires_at_unix_seconds=self._read_expiry(payload),
            raw=payload,
        )

    def try_decode(self, token: str) -> Optional[DecodedClaims]:
        """Like decode(), but returns None instead of raising."""
        try:
            return self.decode(token)
        except MalformedTokenError:
            return None

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _read_expiry(payload: Mapping[str, Any]) -> int | float:
        exp = payload.get(EXPIRY_CLAIM)

        # bool is an int subclass, but never a timestamp
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise MalformedTokenError(f"Missing or non-numeric '{EXPIRY_CLAIM}' claim: {exp!r}")
        if isinstance(exp, float) and not math.isfinite(exp):
            raise MalformedTokenError(f"Non-finite '{EXPIRY_CLAIM}' claim: {exp!r}")

        return exp

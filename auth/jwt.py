"""
Session token creation and verification.

These are not JWTs and will not validate with a JWT library: a token is two
base64url segments, ``<claims>.<signature>``, with no header segment.  The
claims are a JSON object ``{"sub", "iat", "exp"}``; the signature is its
HMAC-SHA256 under the configured secret (env var: ``JWT_SECRET``).
Verification never raises; it returns a ``TokenResult`` tagged VALID,
INVALID or EXPIRED.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

DEFAULT_EXPIRY_SECONDS = 86400


class TokenStatus(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    EXPIRED = "expired"


@dataclass(frozen=True)
class TokenResult:
    status: TokenStatus
    user_id: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status is TokenStatus.VALID


_INVALID = TokenResult(TokenStatus.INVALID)
_EXPIRED = TokenResult(TokenStatus.EXPIRED)


def _b64encode(raw: bytes) -> str:
    return urlsafe_b64encode(raw).rstrip(b"=").decode()


def _b64decode(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return urlsafe_b64decode(padded.encode("ascii"))


class TokenIssuer:
    """Issues and verifies session tokens for one signing secret."""

    def __init__(
        self,
        secret: str,
        expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret.encode()
        self._expiry_seconds = expiry_seconds
        self._clock = clock

    def _sign(self, raw: bytes) -> str:
        return _b64encode(hmac.new(self._secret, raw, hashlib.sha256).digest())

    def issue(self, user_id: int | str) -> str:
        """Create a signed token with ``user_id`` as subject."""
        issued_at = int(self._clock())
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._expiry_seconds,
        }
        raw = json.dumps(claims, separators=(",", ":")).encode()
        return _b64encode(raw) + "." + self._sign(raw)

    def verify(self, token: str, now: Optional[float] = None) -> TokenResult:
        """Check signature, then expiry.  Malformed input is INVALID."""
        parts = token.split(".")
        if len(parts) != 2 or not all(parts):
            return _INVALID
        try:
            raw = _b64decode(parts[0])
        except (binascii.Error, ValueError):
            return _INVALID

        if not hmac.compare_digest(parts[1].encode(), self._sign(raw).encode()):
            return _INVALID

        try:
            claims = json.loads(raw)
            subject = claims["sub"]
            expires_at = float(claims["exp"])
        except (ValueError, KeyError, TypeError):
            return _INVALID
        if not isinstance(subject, str) or not subject:
            return _INVALID

        current = self._clock() if now is None else now
        if current >= expires_at:
            return _EXPIRED
        return TokenResult(TokenStatus.VALID, user_id=subject)

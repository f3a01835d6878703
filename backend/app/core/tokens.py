"""Token Service — signed, time-bounded bearer tokens for authenticated identities.

Invariants:
    - Payload is exactly {id, username, exp}; never password material
    - exp is whole seconds since epoch, issued_at + ttl rounded up, so a token
      never expires before its full ttl has elapsed
    - verify() is pure computation: no IO, no clock other than the injected `now`
    - Bad signature / malformed token / missing claims -> TokenInvalidError
    - exp <= now -> TokenExpiredError

Design Decisions:
    - TokenConfig is constructed once from Settings at startup and injected;
      the signing key is never read from a module global
    - python-jose does the signing; expiry is compared here against `now`
      so callers and tests control the clock
"""

import math
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Protocol
from uuid import UUID

from jose import JWTError, jwt

from app.core.errors import TokenExpiredError, TokenInvalidError

TOKEN_SCHEME = "Token"


@dataclass(frozen=True)
class TokenConfig:
    secret: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(days=60)

    @classmethod
    def from_settings(cls, settings) -> "TokenConfig":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(days=settings.token_ttl_days),
        )


@dataclass(frozen=True)
class TokenSubject:
    """Identity asserted by a verified token."""
    id: UUID
    username: str


class IdentityLike(Protocol):
    id: UUID
    username: str


class TokenService:
    """Issues and verifies identity tokens with an injected TokenConfig."""

    def __init__(self, config: TokenConfig):
        self._config = config

    @property
    def ttl(self) -> timedelta:
        return self._config.ttl

    def issue(self, identity: IdentityLike, now: float | None = None) -> str:
        issued_at = time.time() if now is None else now
        payload = {
            "id": str(identity.id),
            "username": identity.username,
            "exp": math.ceil(issued_at + self._config.ttl.total_seconds()),
        }
        return jwt.encode(
            payload, self._config.secret, algorithm=self._config.algorithm,
        )

    def verify(self, token: str, now: float | None = None) -> TokenSubject:
        try:
            claims = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise TokenInvalidError(f"Token is invalid: {e}") from e

        exp = claims.get("exp")
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            raise TokenInvalidError("Token has no valid expiry")
        try:
            subject = TokenSubject(
                id=UUID(str(claims["id"])), username=str(claims["username"]),
            )
        except (KeyError, ValueError) as e:
            raise TokenInvalidError("Token subject is malformed") from e

        checked_at = time.time() if now is None else now
        if exp <= checked_at:
            raise TokenExpiredError()
        return subject


def extract_bearer(authorization: str | None) -> str | None:
    """Return the token from an `Authorization: Token <value>` header, else None."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0] != TOKEN_SCHEME:
        return None
    return parts[1]

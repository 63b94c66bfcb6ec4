"""Stateless bearer tokens signed with a shared secret."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from ..errors import ConfigError, InvalidInput, InvalidToken
from ..logging_config import get_logger

logger = get_logger(__name__)

ALGORITHM = "HS256"
MIN_SECRET_BYTES = 32
_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenService:
    """Issue and verify HS256 JWTs carrying a username subject.

    Tokens are never stored; a token is valid until its ``exp`` claim passes.
    The secret is read through ``secret_provider`` on every call so that a
    missing or weak secret fails each operation rather than a startup check.
    """

    def __init__(
        self,
        secret_provider: Callable[[], Optional[str]],
        ttl: timedelta,
    ) -> None:
        self._secret_provider = secret_provider
        self.ttl = ttl

    @classmethod
    def from_config(cls, config) -> "TokenService":
        return cls(
            secret_provider=lambda: config.JWT_SECRET,
            ttl=timedelta(seconds=config.JWT_TTL_SECONDS),
        )

    def _signing_key(self) -> bytes:
        secret = self._secret_provider()
        key = secret.encode("utf-8") if secret else b""
        if len(key) < MIN_SECRET_BYTES:
            logger.error("JWT secret is missing or shorter than %d bytes", MIN_SECRET_BYTES)
            raise ConfigError(f"JWT secret must be at least {MIN_SECRET_BYTES} bytes long")
        return key

    def issue(self, username: str) -> str:
        """Return a signed token for ``username`` expiring after the TTL."""

        key = self._signing_key()
        if not username:
            raise InvalidInput("Username cannot be empty")
        issued_at = datetime.now(timezone.utc)
        claims = {
            "sub": username,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(claims, key, algorithm=ALGORITHM)

    def verify(self, token: str) -> str:
        """Return the token subject or raise ``InvalidToken``.

        Bad signatures, malformed structure, missing claims and expiry all
        raise the same error with the same message.
        """

        key = self._signing_key()
        try:
            claims = jwt.decode(
                token,
                key,
                algorithms=[ALGORITHM],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.PyJWTError as exc:
            logger.warning("Token verification failed: %s", exc.__class__.__name__)
            raise InvalidToken("Invalid token") from None

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            logger.warning("Token verification failed: empty subject")
            raise InvalidToken("Invalid token")
        return subject

    def is_valid(self, token: str, expected_username: str) -> bool:
        """True when the token verifies and belongs to ``expected_username``."""

        try:
            return self.verify(token) == expected_username
        except (InvalidToken, ConfigError):
            return False

"""Registration and login against argon2 password hashes."""

from __future__ import annotations

from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from ..domain.repositories import UserRepository
from ..errors import InvalidCredentials, InvalidInput, UserNotFound
from ..logging_config import get_logger
from ..models.user import USERNAME_MAX, User
from .tokens import TokenService

logger = get_logger(__name__)

_hasher = PasswordHasher()


class CredentialService:
    """Create users and exchange valid credentials for fresh tokens."""

    def __init__(self, users: UserRepository, tokens: TokenService) -> None:
        self.users = users
        self.tokens = tokens

    def register(self, username: str, password: str, email: Optional[str] = None) -> str:
        """Store a new user and return a token for it."""

        username = (username or "").strip()
        if not username:
            raise InvalidInput("Username is required")
        if len(username) > USERNAME_MAX:
            raise InvalidInput(f"Username must not exceed {USERNAME_MAX} characters")
        if not password:
            raise InvalidInput("Password is required")
        if email is not None and not isinstance(email, str):
            raise InvalidInput("Email must be a string")

        # Mint first: a signing misconfiguration must not leave a stored user behind.
        token = self.tokens.issue(username)
        user = User(
            username=username,
            password_hash=_hasher.hash(password),
            email=(email or "").strip() or None,
        )
        self.users.create(user)
        logger.info("Registered user", extra={"username": username})
        return token

    def login(self, username: str, password: str) -> str:
        """Return a fresh token when the password matches the stored hash."""

        user = self.get_user((username or "").strip())
        try:
            _hasher.verify(user.password_hash, password or "")
        except (VerifyMismatchError, InvalidHash, VerificationError):
            logger.warning("Rejected login", extra={"username": user.username})
            raise InvalidCredentials("Invalid credentials") from None
        return self.tokens.issue(user.username)

    def get_user(self, username: str) -> User:
        if not username:
            raise UserNotFound("User not found")
        user = self.users.get_by_username(username)
        if user is None:
            raise UserNotFound(f"User not found with username: {username}")
        return user

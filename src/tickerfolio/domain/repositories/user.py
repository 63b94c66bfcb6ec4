"""User repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.user import User


class UserRepository(Protocol):
    """Repository for registered users."""

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve a user by exact username."""
        ...

    def create(self, user: User) -> User:
        """Persist a new user; raises AlreadyExists on a duplicate username."""
        ...

"""SQLModel implementation of User repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...errors import AlreadyExists
from ...models.user import User
from ..database import SessionFactory


class SQLModelUserRepository:
    """SQLModel-based user repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve a user by exact username."""
        with self.session_factory() as session:
            return session.exec(select(User).where(User.username == username)).first()

    def create(self, user: User) -> User:
        """Create a new user; the unique index decides duplicates."""
        try:
            with self.session_factory() as session:
                session.add(user)
                session.flush()
                session.refresh(user)
                return user
        except IntegrityError as exc:
            raise AlreadyExists(f"Username '{user.username}' is already registered") from exc

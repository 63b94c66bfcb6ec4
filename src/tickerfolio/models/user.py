"""User model backing credential checks."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

USERNAME_MAX = 64


class User(SQLModel, table=True):
    """Registered account; identity is immutable after registration."""

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(nullable=False, unique=True, index=True, max_length=USERNAME_MAX)
    password_hash: str = Field(nullable=False, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

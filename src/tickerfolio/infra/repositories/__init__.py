"""Concrete repository implementations using SQLModel."""

from .holding import SQLModelHoldingRepository
from .portfolio import SQLModelPortfolioRepository
from .user import SQLModelUserRepository

__all__ = [
    "SQLModelHoldingRepository",
    "SQLModelPortfolioRepository",
    "SQLModelUserRepository",
]

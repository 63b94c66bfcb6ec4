"""Repository protocol definitions for domain layer."""

from .holding import HoldingRepository
from .portfolio import PortfolioRepository
from .user import UserRepository

__all__ = [
    "HoldingRepository",
    "PortfolioRepository",
    "UserRepository",
]

"""SQLModel table exports."""

from .portfolio import Holding, Portfolio
from .user import User

__all__ = [
    "Holding",
    "Portfolio",
    "User",
]

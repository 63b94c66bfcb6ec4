"""Blueprint exports."""

from . import auth, portfolios, stocks

__all__ = [
    "auth",
    "portfolios",
    "stocks",
]

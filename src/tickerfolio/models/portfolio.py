"""Portfolio and holding models.

Rows reference each other by foreign-key id only; child collections are
fetched explicitly through the repositories.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

PORTFOLIO_NAME_MAX = 100
TICKER_MAX = 10


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Portfolio(SQLModel, table=True):
    """Named collection of holdings owned by exactly one user."""

    __tablename__: ClassVar[str] = "portfolio"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=PORTFOLIO_NAME_MAX)
    owner_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)


class Holding(SQLModel, table=True):
    """A strictly positive quantity of one ticker inside a portfolio."""

    __tablename__: ClassVar[str] = "holding"
    __table_args__ = (
        UniqueConstraint("portfolio_id", "ticker", name="uq_holding_portfolio_ticker"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    portfolio_id: int = Field(foreign_key="portfolio.id", nullable=False, index=True)
    ticker: str = Field(nullable=False, max_length=TICKER_MAX)
    quantity: float = Field(nullable=False)
    # Last price written by an add; reads re-price instead of trusting it.
    current_price: float = Field(nullable=False)
    added_at: datetime = Field(default_factory=_utcnow, nullable=False)

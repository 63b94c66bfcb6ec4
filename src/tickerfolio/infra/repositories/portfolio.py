"""SQLModel implementation of Portfolio repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.portfolio import Portfolio
from ..database import SessionFactory

# Largest id a signed 64-bit INTEGER column can hold.
MAX_ROW_ID = 2**63 - 1


class SQLModelPortfolioRepository:
    """SQLModel-based portfolio repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, portfolio_id: int) -> Optional[Portfolio]:
        """Retrieve a portfolio by ID regardless of owner."""
        if not 0 < portfolio_id <= MAX_ROW_ID:
            return None
        with self.session_factory() as session:
            return session.get(Portfolio, portfolio_id)

    def list_by_owner(self, owner_id: int) -> list[Portfolio]:
        """List an owner's portfolios in creation order."""
        with self.session_factory() as session:
            statement = (
                select(Portfolio)
                .where(Portfolio.owner_id == owner_id)
                .order_by(Portfolio.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    def create(self, portfolio: Portfolio) -> Portfolio:
        """Create a new portfolio."""
        with self.session_factory() as session:
            session.add(portfolio)
            session.flush()
            session.refresh(portfolio)
            return portfolio

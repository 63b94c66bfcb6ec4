"""Portfolio repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.portfolio import Portfolio


class PortfolioRepository(Protocol):
    """Repository for portfolio rows."""

    def get_by_id(self, portfolio_id: int) -> Optional[Portfolio]:
        """Retrieve a portfolio by ID regardless of owner."""
        ...

    def list_by_owner(self, owner_id: int) -> list[Portfolio]:
        """List an owner's portfolios in creation order."""
        ...

    def create(self, portfolio: Portfolio) -> Portfolio:
        """Create a new portfolio."""
        ...

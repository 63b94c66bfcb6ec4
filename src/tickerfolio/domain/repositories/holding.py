"""Holding repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.portfolio import Holding


class HoldingRepository(Protocol):
    """Repository for managing portfolio holding entities."""

    def list_by_portfolio(self, portfolio_id: int) -> list[Holding]:
        """List holdings for a portfolio ordered by ticker."""
        ...

    def add_quantity(
        self, portfolio_id: int, ticker: str, quantity: float, price: float
    ) -> Holding:
        """Atomically increment an existing holding or insert a new one."""
        ...

    def delete_by_ticker(self, portfolio_id: int, ticker: str) -> bool:
        """Delete the holding for a ticker; False when nothing matched."""
        ...

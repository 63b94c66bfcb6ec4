"""Price enrichment and totals for portfolio read paths."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..logging_config import get_logger
from ..models.portfolio import Holding, Portfolio
from .portfolios import PortfolioStore, PriceSource

logger = get_logger(__name__)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(slots=True)
class EnrichedHolding:
    id: Optional[int]
    ticker: str
    quantity: float
    current_price: float
    added_at: Optional[datetime]
    # False when the lookup failed and current_price is the 0.0 placeholder.
    price_available: bool = True

    @property
    def value(self) -> float:
        return self.quantity * self.current_price

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ticker": self.ticker,
            "quantity": self.quantity,
            "currentPrice": self.current_price,
            "totalValue": self.value,
            "addedAt": _iso(self.added_at),
            "priceAvailable": self.price_available,
        }


@dataclass(slots=True)
class EnrichedPortfolio:
    id: Optional[int]
    name: str
    owner_id: int
    created_at: Optional[datetime]
    holdings: list[EnrichedHolding] = field(default_factory=list)
    total_value: float = 0.0

    @property
    def has_unpriced_holdings(self) -> bool:
        return any(not holding.price_available for holding in self.holdings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "userId": self.owner_id,
            "createdAt": _iso(self.created_at),
            "assets": [holding.to_dict() for holding in self.holdings],
            "totalValue": self.total_value,
        }


class ValuationEngine:
    """Re-price every holding on read and total the result.

    A failed lookup prices that holding at 0 and flags it instead of failing
    the whole view.
    """

    def __init__(self, store: PortfolioStore, prices: PriceSource) -> None:
        self.store = store
        self.prices = prices

    def _price(self, holding: Holding) -> EnrichedHolding:
        try:
            price = float(self.prices.current_price(holding.ticker))
            available = True
        except Exception as exc:
            logger.warning(
                "Pricing failed during enrichment, using 0",
                extra={"ticker": holding.ticker, "reason": str(exc)},
            )
            price = 0.0
            available = False
        return EnrichedHolding(
            id=holding.id,
            ticker=holding.ticker,
            quantity=holding.quantity,
            current_price=price,
            added_at=holding.added_at,
            price_available=available,
        )

    def enrich(self, portfolio: Portfolio) -> EnrichedPortfolio:
        enriched = [self._price(holding) for holding in self.store.holdings(portfolio.id)]
        # Totals only after every holding has been priced.
        total = sum(holding.quantity * holding.current_price for holding in enriched)
        return EnrichedPortfolio(
            id=portfolio.id,
            name=portfolio.name,
            owner_id=portfolio.owner_id,
            created_at=portfolio.created_at,
            holdings=enriched,
            total_value=total,
        )

    def portfolio_details(self, portfolio_id: int, requester: str) -> EnrichedPortfolio:
        return self.enrich(self.store.get(portfolio_id, requester))

    def portfolios_for(self, owner: str) -> list[EnrichedPortfolio]:
        return [self.enrich(portfolio) for portfolio in self.store.list_for_owner(owner)]

"""Portfolio persistence scoped to a single owning user."""

from __future__ import annotations

import math
from numbers import Real
from typing import Protocol

from ..domain.repositories import HoldingRepository, PortfolioRepository, UserRepository
from ..errors import (
    AccessDenied,
    AssetNotFound,
    InvalidInput,
    PortfolioNotFound,
    PriceFetchFailed,
    UserNotFound,
)
from ..logging_config import get_logger
from ..models.portfolio import PORTFOLIO_NAME_MAX, TICKER_MAX, Holding, Portfolio
from ..models.user import User

logger = get_logger(__name__)


class PriceSource(Protocol):
    def current_price(self, ticker: str) -> float: ...


def normalize_ticker(ticker: str) -> str:
    """Strip and upper-case a ticker, rejecting empty or oversized symbols."""

    symbol = (ticker or "").strip().upper()
    if not symbol:
        raise InvalidInput("Ticker symbol is required")
    if len(symbol) > TICKER_MAX:
        raise InvalidInput(f"Ticker symbol must not exceed {TICKER_MAX} characters")
    return symbol


def _validate_quantity(quantity) -> float:
    if isinstance(quantity, bool) or not isinstance(quantity, Real):
        raise InvalidInput("Quantity must be a number")
    value = float(quantity)
    if not math.isfinite(value) or value <= 0:
        raise InvalidInput("Quantity must be positive")
    return value


class PortfolioStore:
    """Create, read and mutate portfolios on behalf of a requesting username.

    Ownership is checked after existence: an unknown id raises
    ``PortfolioNotFound`` even for non-owners, and a known id owned by someone
    else raises ``AccessDenied``.
    """

    def __init__(
        self,
        users: UserRepository,
        portfolios: PortfolioRepository,
        holdings: HoldingRepository,
        prices: PriceSource,
    ) -> None:
        self.users = users
        self.portfolios = portfolios
        self.holding_repo = holdings
        self.prices = prices

    def _owner(self, username: str) -> User:
        user = self.users.get_by_username(username) if username else None
        if user is None:
            raise UserNotFound(f"User not found with username: {username}")
        return user

    def create(self, owner: str, name: str) -> Portfolio:
        user = self._owner(owner)
        name = (name or "").strip()
        if not name:
            raise InvalidInput("Portfolio name is required")
        if len(name) > PORTFOLIO_NAME_MAX:
            raise InvalidInput(
                f"Portfolio name must be between 1 and {PORTFOLIO_NAME_MAX} characters"
            )
        portfolio = self.portfolios.create(Portfolio(name=name, owner_id=user.id))
        logger.info(
            "Created portfolio",
            extra={"portfolio_id": portfolio.id, "owner": owner},
        )
        return portfolio

    def list_for_owner(self, owner: str) -> list[Portfolio]:
        user = self._owner(owner)
        return self.portfolios.list_by_owner(user.id)

    def get(self, portfolio_id: int, requester: str) -> Portfolio:
        portfolio = self.portfolios.get_by_id(portfolio_id)
        if portfolio is None:
            raise PortfolioNotFound("Portfolio not found")
        user = self.users.get_by_username(requester) if requester else None
        if user is None or user.id != portfolio.owner_id:
            logger.warning(
                "Denied portfolio access",
                extra={"portfolio_id": portfolio_id, "requester": requester},
            )
            raise AccessDenied("Access denied: Portfolio does not belong to user")
        return portfolio

    def holdings(self, portfolio_id: int) -> list[Holding]:
        """Holdings of a portfolio, fetched fresh on every call."""
        return self.holding_repo.list_by_portfolio(portfolio_id)

    def add_holding(
        self, portfolio_id: int, ticker: str, quantity: float, requester: str
    ) -> Holding:
        """Add ``quantity`` of ``ticker``, merging into an existing holding.

        The price is fetched before anything is written; if it cannot be
        obtained the whole call fails with ``PriceFetchFailed``.
        """

        portfolio = self.get(portfolio_id, requester)
        symbol = normalize_ticker(ticker)
        delta = _validate_quantity(quantity)

        try:
            price = float(self.prices.current_price(symbol))
        except Exception as exc:
            raise PriceFetchFailed(f"Failed to fetch stock price for {symbol}: {exc}") from exc
        if not math.isfinite(price) or price <= 0:
            raise PriceFetchFailed(f"Failed to fetch stock price for {symbol}: got {price}")

        holding = self.holding_repo.add_quantity(portfolio.id, symbol, delta, price)
        logger.info(
            "Added to holding",
            extra={
                "portfolio_id": portfolio.id,
                "ticker": symbol,
                "delta": delta,
                "quantity": holding.quantity,
            },
        )
        return holding

    def remove_holding(self, portfolio_id: int, ticker: str, requester: str) -> None:
        portfolio = self.get(portfolio_id, requester)
        symbol = normalize_ticker(ticker)
        if not self.holding_repo.delete_by_ticker(portfolio.id, symbol):
            raise AssetNotFound("Asset not found in portfolio")
        logger.info(
            "Removed holding",
            extra={"portfolio_id": portfolio.id, "ticker": symbol},
        )

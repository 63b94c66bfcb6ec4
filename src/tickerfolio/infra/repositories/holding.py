"""SQLModel implementation of Holding repository."""

from __future__ import annotations

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...logging_config import get_logger
from ...models.portfolio import Holding
from ..database import SessionFactory

logger = get_logger(__name__)


class SQLModelHoldingRepository:
    """SQLModel-based holding repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_by_portfolio(self, portfolio_id: int) -> list[Holding]:
        """List holdings for a portfolio ordered by ticker."""
        with self.session_factory() as session:
            statement = (
                select(Holding)
                .where(Holding.portfolio_id == portfolio_id)
                .order_by(Holding.ticker)  # type: ignore
            )
            return list(session.exec(statement).all())

    def add_quantity(
        self, portfolio_id: int, ticker: str, quantity: float, price: float
    ) -> Holding:
        """Increment an existing holding or insert a new one, atomically.

        The increment runs as a single ``UPDATE ... SET quantity = quantity + :q``
        so concurrent adds to the same pair serialize in the database. When two
        writers both insert, the loser hits the unique constraint and retries
        as an increment.
        """
        try:
            return self._increment_or_insert(portfolio_id, ticker, quantity, price)
        except IntegrityError:
            logger.info(
                "Concurrent insert for holding, retrying as increment",
                extra={"portfolio_id": portfolio_id, "ticker": ticker},
            )
            return self._increment_or_insert(portfolio_id, ticker, quantity, price)

    def _increment_or_insert(
        self, portfolio_id: int, ticker: str, quantity: float, price: float
    ) -> Holding:
        with self.session_factory() as session:
            increment = (
                update(Holding)
                .where(Holding.portfolio_id == portfolio_id, Holding.ticker == ticker)  # type: ignore[arg-type]
                .values(quantity=Holding.quantity + quantity, current_price=price)
            )
            result = session.exec(increment)  # type: ignore[call-overload]
            if result.rowcount:
                statement = select(Holding).where(
                    Holding.portfolio_id == portfolio_id, Holding.ticker == ticker
                )
                return session.exec(statement).one()

            holding = Holding(
                portfolio_id=portfolio_id,
                ticker=ticker,
                quantity=quantity,
                current_price=price,
            )
            session.add(holding)
            session.flush()
            session.refresh(holding)
            return holding

    def delete_by_ticker(self, portfolio_id: int, ticker: str) -> bool:
        """Delete the holding for a ticker; False when nothing matched."""
        with self.session_factory() as session:
            statement = delete(Holding).where(
                Holding.portfolio_id == portfolio_id, Holding.ticker == ticker  # type: ignore[arg-type]
            )
            result = session.exec(statement)  # type: ignore[call-overload]
            return bool(result.rowcount)

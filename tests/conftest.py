"""Pytest configuration and shared fixtures for Tickerfolio tests.

Provides an isolated SQLite database per test, repositories and services
wired the same way the app factory wires them, and a deterministic price
source so no test touches the network.
"""

from __future__ import annotations

import tempfile
from datetime import timedelta
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from tickerfolio import TestConfig, create_app
from tickerfolio.extensions import build_services
from tickerfolio.infra.database import create_session_factory
from tickerfolio.infra.repositories import (
    SQLModelHoldingRepository,
    SQLModelPortfolioRepository,
    SQLModelUserRepository,
)
from tickerfolio.models import User
from tickerfolio.services import (
    CredentialService,
    PortfolioStore,
    PriceOracle,
    TokenService,
    ValuationEngine,
)

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256!"


class FakePrices:
    """Price source with a fixed table; tickers in ``failing`` raise."""

    def __init__(self, prices: dict[str, float] | None = None, default: float = 100.0):
        self.prices = dict(prices or {"AAPL": 150.25, "MSFT": 300.75, "VTI": 220.5})
        self.default = default
        self.failing: set[str] = set()
        self.calls: list[str] = []

    def current_price(self, ticker: str) -> float:
        symbol = ticker.upper()
        self.calls.append(symbol)
        if symbol in self.failing:
            raise RuntimeError(f"quote source unavailable for {symbol}")
        return self.prices.get(symbol, self.default)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated file-backed SQLite database for each test.

    A file (rather than ``:memory:``) lets separate sessions and threads see
    the same data.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories receive in production."""
    return create_session_factory(db_engine)


# =============================================================================
# Repositories & Services
# =============================================================================


@pytest.fixture
def user_repo(session_factory):
    return SQLModelUserRepository(session_factory)


@pytest.fixture
def portfolio_repo(session_factory):
    return SQLModelPortfolioRepository(session_factory)


@pytest.fixture
def holding_repo(session_factory):
    return SQLModelHoldingRepository(session_factory)


@pytest.fixture
def fake_prices() -> FakePrices:
    return FakePrices()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret_provider=lambda: TEST_SECRET, ttl=timedelta(hours=1))


@pytest.fixture
def credentials(user_repo, token_service) -> CredentialService:
    return CredentialService(user_repo, token_service)


@pytest.fixture
def store(user_repo, portfolio_repo, holding_repo, fake_prices) -> PortfolioStore:
    return PortfolioStore(
        users=user_repo,
        portfolios=portfolio_repo,
        holdings=holding_repo,
        prices=fake_prices,
    )


@pytest.fixture
def valuation(store, fake_prices) -> ValuationEngine:
    return ValuationEngine(store, fake_prices)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user_factory(user_repo):
    """Factory for persisted users with a placeholder hash."""

    def _create_user(username: str = "alice", email: str | None = None) -> User:
        return user_repo.create(
            User(username=username, password_hash="dummy-hash", email=email)
        )

    return _create_user


@pytest.fixture
def owner(user_factory) -> User:
    return user_factory("alice")


@pytest.fixture
def stranger(user_factory) -> User:
    return user_factory("mallory")


@pytest.fixture
def portfolio(store, owner):
    return store.create(owner.username, "Retirement")


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app_config(tmp_path, monkeypatch: pytest.MonkeyPatch) -> TestConfig:
    monkeypatch.setenv("TICKERFOLIO_DATA_DIR", str(tmp_path))
    return TestConfig(
        DATABASE_URL=f"sqlite:///{tmp_path / 'api.db'}",
        JWT_SECRET=TEST_SECRET,
        JWT_TTL_SECONDS=3600,
    )


@pytest.fixture
def app(app_config):
    services = build_services(app_config, prices=PriceOracle(api_key=None))
    application = create_app(app_config, services=services)
    yield application
    services.engine.dispose()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client

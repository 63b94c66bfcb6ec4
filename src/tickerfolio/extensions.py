"""Service wiring for the Flask application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests
from flask import Flask, current_app
from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelHoldingRepository,
    SQLModelPortfolioRepository,
    SQLModelUserRepository,
)
from .services import (
    CredentialService,
    InsightService,
    PortfolioStore,
    PriceOracle,
    TokenService,
    ValuationEngine,
)

EXTENSION_KEY = "tickerfolio"


@dataclass(slots=True)
class Services:
    """Everything a request handler needs, built once per app."""

    engine: Engine
    session_factory: SessionFactory
    tokens: TokenService
    credentials: CredentialService
    prices: PriceOracle
    portfolios: PortfolioStore
    valuation: ValuationEngine
    insights: InsightService


def build_services(
    config: BaseConfig,
    *,
    prices: Optional[PriceOracle] = None,
    http_session: Optional[requests.Session] = None,
) -> Services:
    """Create the engine, repositories and services for ``config``."""

    engine, session_factory = bootstrap_database(config)
    users = SQLModelUserRepository(session_factory)
    tokens = TokenService.from_config(config)
    oracle = prices or PriceOracle.from_config(config, session=http_session)
    store = PortfolioStore(
        users=users,
        portfolios=SQLModelPortfolioRepository(session_factory),
        holdings=SQLModelHoldingRepository(session_factory),
        prices=oracle,
    )
    valuation = ValuationEngine(store, oracle)
    return Services(
        engine=engine,
        session_factory=session_factory,
        tokens=tokens,
        credentials=CredentialService(users, tokens),
        prices=oracle,
        portfolios=store,
        valuation=valuation,
        insights=InsightService(valuation),
    )


def init_services(app: Flask, services: Services) -> None:
    app.extensions[EXTENSION_KEY] = services


def get_services() -> Services:
    """Return the services bound to the current app."""

    services = current_app.extensions.get(EXTENSION_KEY)
    if services is None:  # pragma: no cover - app factory always registers
        raise RuntimeError("Services not initialized")
    return services

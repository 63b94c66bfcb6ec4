"""Service module exports."""

from .credentials import CredentialService
from .insights import InsightService
from .portfolios import PortfolioStore
from .pricing import PriceOracle
from .tokens import TokenService
from .valuation import EnrichedHolding, EnrichedPortfolio, ValuationEngine

__all__ = [
    "CredentialService",
    "EnrichedHolding",
    "EnrichedPortfolio",
    "InsightService",
    "PortfolioStore",
    "PriceOracle",
    "TokenService",
    "ValuationEngine",
]

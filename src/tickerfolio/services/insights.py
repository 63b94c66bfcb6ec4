"""Heuristic portfolio commentary derived from an enriched view."""

from __future__ import annotations

from typing import Any

from .valuation import EnrichedPortfolio, ValuationEngine

SECTOR_BUCKETS: dict[str, str] = {
    "AAPL": "Technology",
    "MSFT": "Technology",
    "JNJ": "Healthcare",
    "PFE": "Healthcare",
    "JPM": "Financial",
    "BAC": "Financial",
}

SUGGESTIONS: tuple[tuple[str, str], ...] = (
    ("AAPL", "AAPL - Apple Inc. (Technology)"),
    ("VTI", "VTI - Vanguard Total Stock Market ETF (Broad Market)"),
    ("JNJ", "JNJ - Johnson & Johnson (Healthcare)"),
    ("JPM", "JPM - JPMorgan Chase & Co. (Financial)"),
)


def diversification_score(portfolio: EnrichedPortfolio) -> float:
    if not portfolio.holdings:
        return 0.0
    base = min(100, len(portfolio.holdings) * 15)
    sectors = {SECTOR_BUCKETS.get(h.ticker, "Other") for h in portfolio.holdings}
    return float(min(100, base + len(sectors) * 5))


def risk_level(portfolio: EnrichedPortfolio) -> str:
    count = len(portfolio.holdings)
    if count == 0:
        return "Low"
    if count >= 5 and portfolio.total_value >= 10000:
        return "Low"
    if count >= 3 and portfolio.total_value >= 5000:
        return "Medium"
    return "High"


def recommendations(portfolio: EnrichedPortfolio, score: float) -> list[str]:
    items: list[str] = []
    if score < 50:
        items.append("Consider adding more diverse assets to improve portfolio diversification")
        items.append("Look into ETFs for broad market exposure")
    if len(portfolio.holdings) < 3:
        items.append("Add at least 3-5 different assets for better risk distribution")
    if portfolio.total_value < 1000:
        items.append("Consider increasing your investment amount for better impact")
    if not items:
        items.append("Portfolio shows good diversification. Consider rebalancing quarterly")
    return items


def analysis(portfolio: EnrichedPortfolio) -> dict[str, Any]:
    if not portfolio.holdings:
        return {
            "summary": "Empty portfolio - start by adding your first investment",
            "strengths": ["Clean slate to build from"],
            "weaknesses": ["No diversification", "No returns potential"],
        }
    return {
        "summary": (
            f"Portfolio with {len(portfolio.holdings)} assets "
            f"worth ${portfolio.total_value:,.2f}"
        ),
        "strengths": ["Multiple assets for diversification", "Real-time price tracking"],
        "weaknesses": ["Limited historical data", "No sector analysis"],
    }


def suggested_assets(portfolio: EnrichedPortfolio, limit: int = 3) -> list[str]:
    held = {h.ticker for h in portfolio.holdings}
    return [label for ticker, label in SUGGESTIONS if ticker not in held][:limit]


class InsightService:
    """Cosmetic analysis for a portfolio the requester owns."""

    def __init__(self, valuation: ValuationEngine) -> None:
        self.valuation = valuation

    def insights(self, portfolio_id: int, requester: str) -> dict[str, Any]:
        portfolio = self.valuation.portfolio_details(portfolio_id, requester)
        return summarize(portfolio)


def summarize(portfolio: EnrichedPortfolio) -> dict[str, Any]:
    score = diversification_score(portfolio)
    return {
        "diversificationScore": round(score, 2),
        "riskLevel": risk_level(portfolio),
        "totalValue": portfolio.total_value,
        "assetCount": len(portfolio.holdings),
        "recommendations": recommendations(portfolio, score),
        "analysis": analysis(portfolio),
        "suggestedAssets": suggested_assets(portfolio),
    }

"""Ticker price lookup with a live Alpha Vantage source and static fallback."""

from __future__ import annotations

import math
import time
from types import MappingProxyType
from typing import Any, Mapping, Optional

import requests

from ..logging_config import get_logger

logger = get_logger(__name__)

DEMO_API_KEY = "demo"
DEFAULT_PRICE = 100.0

DEFAULT_FALLBACK_PRICES: Mapping[str, float] = MappingProxyType(
    {
        "IBM": 288.37,
        "AAPL": 150.25,
        "MSFT": 300.75,
        "GOOGL": 2800.50,
        "TSLA": 250.00,
        "AMZN": 3200.00,
        "META": 350.75,
        "VTI": 220.50,
        "SPY": 450.25,
    }
)

# Envelopes Alpha Vantage returns with HTTP 200 instead of data.
_ERROR_KEYS = ("Error Message", "Note", "Information")


class LiveSourceError(Exception):
    """The live quote source could not produce a usable answer."""


class PriceOracle:
    """Resolve tickers to prices; ``current_price`` never raises.

    The live source is tried once per call when a real API key is configured.
    Any failure on that path is logged and answered from ``fallback_prices``,
    then from ``default_price``. There is no cache: each call re-fetches.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        fallback_prices: Mapping[str, float] = DEFAULT_FALLBACK_PRICES,
        default_price: float = DEFAULT_PRICE,
        base_url: str = "https://www.alphavantage.co/query",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.fallback_prices: Mapping[str, float] = MappingProxyType(
            {symbol.upper(): float(price) for symbol, price in fallback_prices.items()}
        )
        self.default_price = float(default_price)
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config, session: Optional[requests.Session] = None) -> "PriceOracle":
        return cls(
            config.ALPHA_VANTAGE_API_KEY,
            default_price=config.DEFAULT_PRICE,
            base_url=config.ALPHA_VANTAGE_URL,
            timeout=config.PRICE_TIMEOUT_SECONDS,
            session=session,
        )

    @property
    def live_enabled(self) -> bool:
        return bool(self.api_key) and self.api_key != DEMO_API_KEY

    def current_price(self, ticker: str) -> float:
        symbol = (ticker or "").strip().upper()
        if self.live_enabled:
            try:
                return self._fetch_live_price(symbol)
            except LiveSourceError as exc:
                logger.warning(
                    "Live price lookup failed, falling back to reference table",
                    extra={"ticker": symbol, "reason": str(exc)},
                )
        else:
            logger.debug("No live API key configured, using reference table")
        return self._fallback_price(symbol)

    def stock_info(self, ticker: str) -> dict[str, Any]:
        """Return the current price plus best-effort descriptive fields."""

        symbol = (ticker or "").strip().upper()
        info: dict[str, Any] = {
            "ticker": symbol,
            "currentPrice": self.current_price(symbol),
            "timestamp": int(time.time() * 1000),
        }
        if self.live_enabled:
            try:
                info.update(self._fetch_overview(symbol))
            except LiveSourceError as exc:
                logger.warning(
                    "Failed to fetch additional info",
                    extra={"ticker": symbol, "reason": str(exc)},
                )
        return info

    def _fallback_price(self, symbol: str) -> float:
        price = self.fallback_prices.get(symbol)
        if price is not None:
            return price
        logger.warning("Unknown ticker, returning default price", extra={"ticker": symbol})
        return self.default_price

    def _query(self, function: str, symbol: str) -> dict[str, Any]:
        params = {"function": function, "symbol": symbol, "apikey": self.api_key}
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise LiveSourceError(f"{function} request failed: {exc}") from exc

        if not isinstance(payload, dict):
            raise LiveSourceError(f"{function} returned a non-object payload")
        for key in _ERROR_KEYS:
            if key in payload:
                raise LiveSourceError(f"{function} returned '{key}': {payload[key]}")
        return payload

    def _fetch_live_price(self, symbol: str) -> float:
        payload = self._query("GLOBAL_QUOTE", symbol)
        quote = payload.get("Global Quote")
        if not isinstance(quote, dict) or not quote:
            raise LiveSourceError(f"No data found for ticker: {symbol}")
        raw_price = quote.get("05. price")
        if raw_price is None:
            raise LiveSourceError(f"Price not found in response for ticker: {symbol}")
        try:
            price = float(raw_price)
        except (TypeError, ValueError) as exc:
            raise LiveSourceError(f"Unparsable price {raw_price!r} for {symbol}") from exc
        if not math.isfinite(price) or price <= 0:
            raise LiveSourceError(f"Non-positive price {price} for {symbol}")
        logger.info("Fetched live price", extra={"ticker": symbol, "price": price})
        return price

    def _fetch_overview(self, symbol: str) -> dict[str, str]:
        payload = self._query("OVERVIEW", symbol)
        fields = {"name": "Name", "sector": "Sector", "industry": "Industry"}
        details = {target: payload.get(source) for target, source in fields.items()}
        if not all(isinstance(value, str) and value for value in details.values()):
            raise LiveSourceError(f"Overview for {symbol} is missing descriptive fields")
        return details  # type: ignore[return-value]

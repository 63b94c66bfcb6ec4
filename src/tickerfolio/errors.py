"""Domain error kinds raised by the services."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced to callers."""

    CONFIG_ERROR = "ConfigError"
    INVALID_INPUT = "InvalidInput"
    ALREADY_EXISTS = "AlreadyExists"
    USER_NOT_FOUND = "UserNotFound"
    INVALID_CREDENTIALS = "InvalidCredentials"
    PORTFOLIO_NOT_FOUND = "PortfolioNotFound"
    ASSET_NOT_FOUND = "AssetNotFound"
    ACCESS_DENIED = "AccessDenied"
    INVALID_TOKEN = "InvalidToken"
    PRICE_FETCH_FAILED = "PriceFetchFailed"


class TickerfolioError(Exception):
    """Base class; every subclass pins a single ``kind``."""

    kind: ErrorKind

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.kind.value)
        self.message = message or self.kind.value


class ConfigError(TickerfolioError):
    kind = ErrorKind.CONFIG_ERROR


class InvalidInput(TickerfolioError):
    kind = ErrorKind.INVALID_INPUT


class AlreadyExists(TickerfolioError):
    kind = ErrorKind.ALREADY_EXISTS


class UserNotFound(TickerfolioError):
    kind = ErrorKind.USER_NOT_FOUND


class InvalidCredentials(TickerfolioError):
    kind = ErrorKind.INVALID_CREDENTIALS


class PortfolioNotFound(TickerfolioError):
    kind = ErrorKind.PORTFOLIO_NOT_FOUND


class AssetNotFound(TickerfolioError):
    kind = ErrorKind.ASSET_NOT_FOUND


class AccessDenied(TickerfolioError):
    kind = ErrorKind.ACCESS_DENIED


class InvalidToken(TickerfolioError):
    kind = ErrorKind.INVALID_TOKEN


class PriceFetchFailed(TickerfolioError):
    """Only raised on write paths; reads fail open instead."""

    kind = ErrorKind.PRICE_FETCH_FAILED


__all__ = [
    "AccessDenied",
    "AlreadyExists",
    "AssetNotFound",
    "ConfigError",
    "ErrorKind",
    "InvalidCredentials",
    "InvalidInput",
    "InvalidToken",
    "PortfolioNotFound",
    "PriceFetchFailed",
    "TickerfolioError",
    "UserNotFound",
]

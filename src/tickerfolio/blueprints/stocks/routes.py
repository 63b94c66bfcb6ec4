"""Authenticated quote lookups."""

from __future__ import annotations

from ...extensions import get_services
from ..common import Err, attempt, authenticate, error_response, respond
from . import bp


@bp.get("/<ticker>/price")
@bp.get("/<ticker>/info", endpoint="stock_info")
def stock_price(ticker: str):
    subject = authenticate()
    if isinstance(subject, Err):
        return error_response(subject)
    return respond(attempt(get_services().prices.stock_info, ticker))

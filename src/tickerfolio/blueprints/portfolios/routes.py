"""Portfolio and holding endpoints; every route requires a bearer token."""

from __future__ import annotations

from ...extensions import get_services
from ..common import Err, attempt, authenticate, error_response, json_body, respond
from . import bp


def _create(username: str) -> dict:
    services = get_services()
    portfolio = services.portfolios.create(username, str(json_body().get("name") or ""))
    return services.valuation.enrich(portfolio).to_dict()


def _list(username: str) -> list[dict]:
    return [p.to_dict() for p in get_services().valuation.portfolios_for(username)]


def _details(portfolio_id: int, username: str) -> dict:
    return get_services().valuation.portfolio_details(portfolio_id, username).to_dict()


def _add_asset(portfolio_id: int, username: str) -> dict:
    body = json_body()
    holding = get_services().portfolios.add_holding(
        portfolio_id, str(body.get("ticker") or ""), body.get("quantity"), username
    )
    return {
        "message": "Asset added successfully",
        "ticker": holding.ticker,
        "quantity": holding.quantity,
    }


def _remove_asset(portfolio_id: int, ticker: str, username: str) -> dict:
    get_services().portfolios.remove_holding(portfolio_id, ticker, username)
    return {"message": "Asset removed successfully"}


@bp.post("")
def create_portfolio():
    subject = authenticate()
    if isinstance(subject, Err):
        return error_response(subject)
    return respond(attempt(_create, subject.value), status=201)


@bp.get("")
def list_portfolios():
    subject = authenticate()
    if isinstance(subject, Err):
        return error_response(subject)
    return respond(attempt(_list, subject.value))


@bp.get("/<int:portfolio_id>")
def get_portfolio(portfolio_id: int):
    subject = authenticate()
    if isinstance(subject, Err):
        return error_response(subject)
    return respond(attempt(_details, portfolio_id, subject.value))


@bp.post("/<int:portfolio_id>/assets")
def add_asset(portfolio_id: int):
    subject = authenticate()
    if isinstance(subject, Err):
        return error_response(subject)
    return respond(attempt(_add_asset, portfolio_id, subject.value))


@bp.delete("/<int:portfolio_id>/assets/<ticker>")
def remove_asset(portfolio_id: int, ticker: str):
    subject = authenticate()
    if isinstance(subject, Err):
        return error_response(subject)
    return respond(attempt(_remove_asset, portfolio_id, ticker, subject.value))


@bp.get("/<int:portfolio_id>/insights")
def insights(portfolio_id: int):
    subject = authenticate()
    if isinstance(subject, Err):
        return error_response(subject)
    return respond(attempt(get_services().insights.insights, portfolio_id, subject.value))

"""Flask CLI commands for Tickerfolio."""

from __future__ import annotations

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("tickerfolio-init-db")
    def tickerfolio_init_db() -> None:
        """Create database tables if they do not exist."""

        from .extensions import get_services
        from .infra.database import init_database

        init_database(get_services().engine)
        click.echo("Database schema is up to date.")

    @app.cli.command("tickerfolio-price")
    @click.argument("ticker")
    @click.option("--info", is_flag=True, default=False, help="Include name/sector/industry")
    def tickerfolio_price(ticker: str, info: bool) -> None:
        """Print the current price for TICKER."""

        from .extensions import get_services

        prices = get_services().prices
        if info:
            for key, value in prices.stock_info(ticker).items():
                click.echo(f"{key}: {value}")
        else:
            click.echo(f"{ticker.upper()}: {prices.current_price(ticker):.2f}")

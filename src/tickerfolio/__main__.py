"""Run the development server with ``python -m tickerfolio``."""

from __future__ import annotations

from . import create_app

if __name__ == "__main__":
    create_app().run(host="127.0.0.1", port=5000)

"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Tickerfolio"
    DB_FILENAME = "tickerfolio.db"
    DEMO_API_KEY = "demo"

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("TICKERFOLIO_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("TICKERFOLIO_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("TICKERFOLIO_DATABASE_URL", self._build_sqlite_url())

        # Validated by TokenService on every issue/verify, not here.
        self.JWT_SECRET = os.getenv("TICKERFOLIO_JWT_SECRET")
        self.JWT_TTL_SECONDS = _env_int("TICKERFOLIO_JWT_TTL_SECONDS", 24 * 60 * 60)

        self.ALPHA_VANTAGE_API_KEY = os.getenv("TICKERFOLIO_ALPHA_VANTAGE_API_KEY", self.DEMO_API_KEY)
        self.ALPHA_VANTAGE_URL = os.getenv(
            "TICKERFOLIO_ALPHA_VANTAGE_URL", "https://www.alphavantage.co/query"
        )
        self.PRICE_TIMEOUT_SECONDS = _env_float("TICKERFOLIO_PRICE_TIMEOUT_SECONDS", 10.0)
        self.DEFAULT_PRICE = _env_float("TICKERFOLIO_DEFAULT_PRICE", 100.0)

        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("TICKERFOLIO_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("TICKERFOLIO_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False, "timeout": 30}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; callers override DATABASE_URL."""

    DEBUG = False
    TESTING = True

    def __init__(self, **overrides: Any) -> None:
        super().__init__()
        self.ALPHA_VANTAGE_API_KEY = self.DEMO_API_KEY
        for key, value in overrides.items():
            setattr(self, key, value)

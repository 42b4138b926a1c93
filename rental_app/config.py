import logging
import os

from .utils.constants import DEFAULT_TIMEZONE
from .utils.dates import valid_timezone

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Defaults read from the environment when the app is created."""

    def __init__(self):
        self.APP_ENV = os.getenv("APP_ENV", "development")
        self.SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
        self.RENTAL_TIMEZONE = os.getenv("RENTAL_TIMEZONE", DEFAULT_TIMEZONE)
        self.SEED_DEMO_CATALOG = _env_flag("SEED_DEMO_CATALOG", self.APP_ENV != "test")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    def as_dict(self) -> dict:
        return {k: v for k, v in vars(self).items() if k.isupper()}


def check_config(cfg) -> None:
    """Fail fast on settings the ledger cannot run with."""
    tz = cfg.get("RENTAL_TIMEZONE")
    if not valid_timezone(tz):
        raise ValueError(f"Unknown RENTAL_TIMEZONE: {tz!r}")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)

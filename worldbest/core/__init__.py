"""Core configuration and infrastructure helpers."""

from .config import (
    CHAMPION_ORIGIN,
    CORS_MAX_AGE,
    DATABASE_URL,
    DB_RESET,
    HOST,
    LOG_LEVEL,
    PORT,
    SECRET_KEY,
    TRANSACTION_ATTEMPTS,
)
from .database import create_db_engine, engine, get_session, write_options
from .logging_config import setup_logging
from .time import as_naive_utc, isoformat_z, utcnow

__all__ = [
    "CHAMPION_ORIGIN",
    "CORS_MAX_AGE",
    "DATABASE_URL",
    "DB_RESET",
    "HOST",
    "LOG_LEVEL",
    "PORT",
    "SECRET_KEY",
    "TRANSACTION_ATTEMPTS",
    "as_naive_utc",
    "create_db_engine",
    "engine",
    "get_session",
    "isoformat_z",
    "setup_logging",
    "utcnow",
    "write_options",
]

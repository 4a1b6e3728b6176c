"""Application settings and environment helpers."""

from __future__ import annotations

import os
import secrets
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Return an integer environment variable or raise an error."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


_PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = _PROJECT_ROOT / "data"


# Storage --------------------------------------------------------------------
DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{DATA_DIR / 'app.db'}"
TRANSACTION_ATTEMPTS = max(1, _env_int("TRANSACTION_ATTEMPTS", 3))
DB_RESET = _env_bool("DB_RESET", False)


# HTTP surface ---------------------------------------------------------------
CHAMPION_ORIGIN = os.getenv("CHAMPION_ORIGIN", "https://sublee.github.io")
CORS_MAX_AGE = _env_int("CORS_MAX_AGE", 86400)

HOST = os.getenv("HOST", "127.0.0.1")
PORT = _env_int("PORT", 8080)


# Tokens are keyed per process unless a stable key is configured.
SECRET_KEY = os.getenv("SECRET_KEY") or secrets.token_hex(32)


# Runtime behaviour ----------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


__all__ = [
    "CHAMPION_ORIGIN",
    "CORS_MAX_AGE",
    "DATABASE_URL",
    "DATA_DIR",
    "DB_RESET",
    "HOST",
    "LOG_LEVEL",
    "PORT",
    "SECRET_KEY",
    "TRANSACTION_ATTEMPTS",
]

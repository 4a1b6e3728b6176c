"""Time helpers shared across the server."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def as_naive_utc(moment: datetime) -> datetime:
    """Drop timezone info after converting to UTC; naive values pass through.

    SQLite hands back naive datetimes, so every stored and compared instant is
    kept naive UTC.
    """

    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def isoformat_z(moment: datetime) -> str:
    """Render a naive UTC datetime the way the frontend expects."""

    return as_naive_utc(moment).isoformat() + "Z"


__all__ = ["as_naive_utc", "isoformat_z", "utcnow"]

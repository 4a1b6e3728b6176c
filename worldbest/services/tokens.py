"""Rename credentials handed to the player who set a record."""

from __future__ import annotations

import hashlib
import hmac
from datetime import datetime

from ..core.time import as_naive_utc

TOKEN_LENGTH = 32


def issue_token(moment: datetime, secret: str) -> str:
    """Derive the token for a record created at ``moment``.

    The same instant and secret always give the same token.
    """

    message = as_naive_utc(moment).isoformat().encode("ascii")
    digest = hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()
    return digest[:TOKEN_LENGTH]


__all__ = ["TOKEN_LENGTH", "issue_token"]

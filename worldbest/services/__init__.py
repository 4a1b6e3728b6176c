"""Service layer helpers."""

from .champions import ChampionService, authorized_view, public_view
from .errors import (
    ChampionError,
    InvalidInput,
    NotAuthorized,
    NotHigherScore,
    StorageFailure,
)
from .names import display_name, normalize_name, suggest_name
from .store import ChampionStore, Rename
from .tokens import issue_token

__all__ = [
    "ChampionError",
    "ChampionService",
    "ChampionStore",
    "InvalidInput",
    "NotAuthorized",
    "NotHigherScore",
    "Rename",
    "StorageFailure",
    "authorized_view",
    "display_name",
    "issue_token",
    "normalize_name",
    "public_view",
    "suggest_name",
]

"""Database model exports."""

from .champion import BOARD, TTL, ChampionRecord, no_champion

__all__ = [
    "BOARD",
    "ChampionRecord",
    "TTL",
    "no_champion",
]

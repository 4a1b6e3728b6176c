"""Database model for the world-best score."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field as ORMField, SQLModel

# Every champion expires a week after it was recorded.
TTL = timedelta(days=7)

# All champions share one ancestor so that a single range query sees them.
BOARD = "_"


class ChampionRecord(SQLModel, table=True):
    """A best score together with the credential needed to rename it."""

    __tablename__ = "champion"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    board: str = ORMField(default=BOARD, index=True)
    score: int = 0
    name: str = ""
    replay: str = ""
    duration: float = 0.0
    # Naive UTC; SQLite keeps no offset, so none is stored anywhere.
    recorded_at: datetime = ORMField(
        default=datetime.min, index=True, sa_type=DateTime(timezone=False)
    )
    ttl: int = 0
    token: str = ""

    @property
    def expires_at(self) -> datetime:
        return self.recorded_at + timedelta(seconds=self.ttl)

    def is_expired(self, moment: datetime) -> bool:
        return moment > self.expires_at


def no_champion() -> ChampionRecord:
    """Return the transient record that stands in for an empty board."""

    return ChampionRecord(
        score=0, name="", replay="", recorded_at=datetime.min, ttl=0, token=""
    )


__all__ = ["BOARD", "ChampionRecord", "TTL", "no_champion"]

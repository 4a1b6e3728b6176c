"""Persistence for champion records.

Records are never deleted. Expiry is evaluated when a record is read: the
live champion is the newest record, among the few most recent ones, whose
expiry instant has not passed yet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Union

from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlmodel import Session, SQLModel, col, select

from ..core.config import TRANSACTION_ATTEMPTS
from ..core.database import write_options
from ..core.time import as_naive_utc
from ..models import BOARD, TTL, ChampionRecord, no_champion
from .errors import StorageFailure

logger = logging.getLogger(__name__)

# Older rows cannot be live: a newer record exists or the TTL has elapsed.
RECENT_WINDOW = 10


@dataclass(frozen=True)
class Rename:
    """Replacement that only changes the live champion's display name."""

    name: str


Candidate = Union[ChampionRecord, Rename]
Compare = Callable[[ChampionRecord], None]


class ChampionStore:
    """Reads and transactional writes of champion records."""

    def __init__(
        self,
        engine: Engine,
        attempts: int = TRANSACTION_ATTEMPTS,
        window: int = RECENT_WINDOW,
    ) -> None:
        self.engine = engine
        self.attempts = max(1, attempts)
        self.window = window

    def create_schema(self) -> None:
        SQLModel.metadata.create_all(self.engine, tables=[ChampionRecord.__table__])

    def drop_schema(self) -> None:
        SQLModel.metadata.drop_all(self.engine, tables=[ChampionRecord.__table__])

    def _resolve(self, session: Session, now: datetime) -> ChampionRecord:
        statement = (
            select(ChampionRecord)
            .where(ChampionRecord.board == BOARD)
            .where(col(ChampionRecord.recorded_at) >= now - TTL)
            .order_by(
                col(ChampionRecord.recorded_at).desc(), col(ChampionRecord.id).desc()
            )
            .limit(self.window)
        )
        for champion in session.exec(statement):
            if not champion.is_expired(now):
                return champion
        return no_champion()

    def resolve_live_champion(self, now: datetime) -> ChampionRecord:
        """Return the live champion at ``now`` or the empty sentinel."""

        now = as_naive_utc(now)
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                return self._resolve(session, now)
        except SQLAlchemyError as exc:
            raise StorageFailure(str(exc)) from exc

    def transactionally_replace(
        self, now: datetime, candidate: Candidate, compare: Compare
    ) -> ChampionRecord:
        """Check the live champion and write ``candidate`` in one transaction.

        ``compare`` receives the live champion as seen inside the transaction
        and raises to refuse the write; nothing is written in that case.
        A new record is inserted for a ``ChampionRecord`` candidate, while a
        ``Rename`` updates the name of the live record in place. Contended
        transactions are retried up to ``attempts`` times.
        """

        now = as_naive_utc(now)
        for attempt in range(1, self.attempts + 1):
            try:
                with Session(self.engine, expire_on_commit=False) as session:
                    session.connection(execution_options=write_options(self.engine))
                    live = self._resolve(session, now)
                    compare(live)
                    record = self._apply(session, live, candidate)
                    session.commit()
                    return record
            except OperationalError as exc:
                if attempt >= self.attempts:
                    raise StorageFailure(str(exc)) from exc
                logger.warning(
                    "Champion transaction failed (attempt %d of %d), retrying: %s",
                    attempt,
                    self.attempts,
                    exc,
                )
            except SQLAlchemyError as exc:
                raise StorageFailure(str(exc)) from exc
        raise StorageFailure("transaction was not attempted")

    def _apply(
        self, session: Session, live: ChampionRecord, candidate: Candidate
    ) -> ChampionRecord:
        if isinstance(candidate, Rename):
            if live.id is None:
                raise StorageFailure("there is no live champion to rename")
            live.name = candidate.name
            session.add(live)
            return live

        record = ChampionRecord(**candidate.model_dump(exclude={"id"}))
        record.recorded_at = as_naive_utc(record.recorded_at)
        session.add(record)
        session.flush()
        return record


__all__ = ["Candidate", "ChampionStore", "Compare", "RECENT_WINDOW", "Rename"]

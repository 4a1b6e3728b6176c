"""Use cases around the world-best score."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from ..core.config import SECRET_KEY
from ..core.time import as_naive_utc, isoformat_z
from ..models import TTL, ChampionRecord
from .errors import NotAuthorized, NotHigherScore
from .names import display_name
from .store import ChampionStore, Rename
from .tokens import issue_token

logger = logging.getLogger(__name__)

_TICK = timedelta(microseconds=1)


def public_view(champion: ChampionRecord, authorized: bool) -> Dict[str, Any]:
    """Serialise a champion for anyone asking who holds the record."""

    return {
        "score": champion.score,
        "name": champion.name,
        "replay": champion.replay,
        "expiresAt": isoformat_z(champion.expires_at),
        "authorized": authorized,
    }


def authorized_view(champion: ChampionRecord) -> Dict[str, Any]:
    """Serialise a champion for its owner, including the rename token."""

    return {
        "score": champion.score,
        "name": champion.name,
        "replay": champion.replay,
        "expiresAt": isoformat_z(champion.expires_at),
        "token": champion.token,
    }


class ChampionService:
    """Reads, beats and renames the champion through a ``ChampionStore``."""

    def __init__(
        self,
        store: ChampionStore,
        secret: str = SECRET_KEY,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.store = store
        self.secret = secret
        self.rng = rng or random.Random()

    def get_current_champion(self, now: datetime, caller_token: str) -> Dict[str, Any]:
        champion = self.store.resolve_live_champion(now)
        authorized = bool(caller_token) and caller_token == champion.token
        return public_view(champion, authorized)

    def beat_champion(
        self,
        now: datetime,
        score: int,
        raw_name: Optional[str],
        duration: float,
        replay: Optional[str],
    ) -> Dict[str, Any]:
        """Record ``score`` if it beats the live champion.

        Raises ``NotHigherScore`` when it does not.
        """

        name = display_name(raw_name, self.rng)
        logger.info(
            "Trying to beat champion: %d by '%s' in %.3f sec", score, name, duration
        )

        candidate = ChampionRecord(
            score=score,
            name=name,
            replay=replay or "",
            duration=duration,
            ttl=int(TTL.total_seconds()),
        )
        previous: Dict[str, Any] = {}

        def compare(live: ChampionRecord) -> None:
            previous.update(score=live.score, name=live.name)
            if score <= live.score:
                raise NotHigherScore(score, live.score)
            self._stamp(candidate, now, live)

        champion = self.store.transactionally_replace(now, candidate, compare)
        logger.info(
            "Champion has been beaten: %d by '%s' -> %d by '%s' in %.3f sec",
            previous["score"],
            previous["name"],
            champion.score,
            champion.name,
            duration,
        )
        return authorized_view(champion)

    def _stamp(
        self, candidate: ChampionRecord, now: datetime, live: ChampionRecord
    ) -> None:
        """Date the candidate after the record it beats, then issue its token.

        A request whose clock reading predates the live record still has to
        end up newest, and two records never share an instant or a token.
        """

        recorded_at = as_naive_utc(now)
        if live.id is not None:
            recorded_at = max(recorded_at, live.recorded_at + _TICK)
        candidate.recorded_at = recorded_at
        candidate.token = issue_token(recorded_at, self.secret)

    def rename_champion(
        self, now: datetime, raw_name: Optional[str], caller_token: str
    ) -> Dict[str, Any]:
        """Change the live champion's name if ``caller_token`` set the record."""

        name = display_name(raw_name, self.rng)
        logger.info("Trying to rename champion: '%s'", name)
        previous: Dict[str, Any] = {}

        def compare(live: ChampionRecord) -> None:
            if live.id is None or not caller_token or live.token != caller_token:
                raise NotAuthorized()
            previous["name"] = live.name

        champion = self.store.transactionally_replace(now, Rename(name), compare)
        logger.info("Champion has been renamed: '%s' -> '%s'", previous["name"], name)
        return authorized_view(champion)


__all__ = ["ChampionService", "authorized_view", "public_view"]

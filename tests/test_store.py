from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from worldbest.models import TTL, ChampionRecord
from worldbest.services import NotHigherScore, Rename, StorageFailure

from conftest import T0


def _record(score, recorded_at, ttl=TTL, **fields):
    return ChampionRecord(
        score=score,
        name=fields.get("name", "AAA"),
        replay=fields.get("replay", ""),
        recorded_at=recorded_at,
        ttl=int(ttl.total_seconds()),
        token=fields.get("token", f"token-{score}"),
    )


def _allow(live):
    return None


def _rows(engine):
    with Session(engine) as session:
        return session.exec(select(ChampionRecord)).all()


def test_empty_board_resolves_to_sentinel(store):
    champion = store.resolve_live_champion(T0)
    assert champion.id is None
    assert champion.score == 0
    assert champion.name == ""
    assert champion.token == ""
    assert champion.expires_at.year == 1


def test_replace_inserts_and_resolves_newest(store, engine):
    store.transactionally_replace(T0, _record(10, T0), _allow)
    later = T0 + timedelta(minutes=5)
    committed = store.transactionally_replace(later, _record(20, later), _allow)

    assert committed.id is not None
    live = store.resolve_live_champion(later)
    assert live.id == committed.id
    assert live.score == 20
    assert len(_rows(engine)) == 2


def test_denied_compare_writes_nothing(store, engine):
    store.transactionally_replace(T0, _record(10, T0), _allow)

    def deny(live):
        raise NotHigherScore(5, live.score)

    with pytest.raises(NotHigherScore) as excinfo:
        store.transactionally_replace(T0, _record(5, T0), deny)
    assert excinfo.value.prev_score == 10
    assert [row.score for row in _rows(engine)] == [10]


def test_expired_record_is_skipped(store):
    store.transactionally_replace(T0, _record(10, T0), _allow)

    assert store.resolve_live_champion(T0 + TTL).score == 10
    assert store.resolve_live_champion(T0 + TTL + timedelta(seconds=1)).score == 0


def test_newer_expired_record_falls_back_to_older_live_one(store):
    store.transactionally_replace(T0, _record(10, T0), _allow)
    later = T0 + timedelta(hours=1)
    store.transactionally_replace(later, _record(20, later, ttl=timedelta(0)), _allow)

    assert store.resolve_live_champion(later + timedelta(seconds=1)).score == 10


def test_resolution_only_scans_recent_window(store):
    store.transactionally_replace(T0, _record(10, T0, ttl=timedelta(days=6)), _allow)
    for minute in range(1, store.window + 1):
        moment = T0 + timedelta(minutes=minute)
        store.transactionally_replace(
            moment, _record(minute, moment, ttl=timedelta(0)), _allow
        )

    assert store.resolve_live_champion(T0 + timedelta(hours=1)).score == 0


def test_rename_updates_name_in_place(store, engine):
    original = store.transactionally_replace(
        T0, _record(10, T0, replay="r1", token="secret"), _allow
    )
    renamed = store.transactionally_replace(T0, Rename("ZED"), _allow)

    assert renamed.id == original.id
    rows = _rows(engine)
    assert len(rows) == 1
    assert rows[0].name == "ZED"
    assert (rows[0].score, rows[0].replay, rows[0].token) == (10, "r1", "secret")
    assert rows[0].recorded_at == T0


def test_rename_without_live_champion_fails(store, engine):
    with pytest.raises(StorageFailure):
        store.transactionally_replace(T0, Rename("ZED"), _allow)
    assert _rows(engine) == []


def test_contended_transaction_is_retried(store, engine):
    attempts = []

    def flaky(live):
        attempts.append(live.score)
        if len(attempts) == 1:
            raise OperationalError("BEGIN", {}, Exception("database is locked"))

    committed = store.transactionally_replace(T0, _record(10, T0), flaky)
    assert committed.score == 10
    assert attempts == [0, 0]
    assert len(_rows(engine)) == 1


def test_exhausted_retries_surface_storage_failure(store, engine):
    def locked(live):
        raise OperationalError("BEGIN", {}, Exception("database is locked"))

    with pytest.raises(StorageFailure) as excinfo:
        store.transactionally_replace(T0, _record(10, T0), locked)
    assert "database is locked" in str(excinfo.value)
    assert _rows(engine) == []


def test_recorded_at_column_is_naive():
    column_type = ChampionRecord.__table__.c.recorded_at.type
    assert column_type.timezone is False


def test_naive_instants_round_trip(store):
    moment = T0 + timedelta(microseconds=123)
    store.transactionally_replace(moment, _record(10, moment), _allow)

    live = store.resolve_live_champion(moment)
    assert live.recorded_at == moment
    assert live.recorded_at.tzinfo is None

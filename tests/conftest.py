import random
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from worldbest.app import app
from worldbest.api.routers.champion import get_champion_service
from worldbest.core import create_db_engine, get_session
from worldbest.services import ChampionService, ChampionStore

T0 = datetime(2024, 1, 1, 12, 0, 0)
SECRET = "test-secret"


@pytest.fixture()
def engine(tmp_path):
    test_engine = create_db_engine(f"sqlite:///{tmp_path / 'champions.db'}")
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def store(engine):
    champion_store = ChampionStore(engine)
    champion_store.create_schema()
    return champion_store


@pytest.fixture()
def service(store):
    return ChampionService(store, secret=SECRET, rng=random.Random(7))


@pytest.fixture()
def client(engine, service):
    def _session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_champion_service] = lambda: service
    app.dependency_overrides[get_session] = _session_override
    yield TestClient(app)
    app.dependency_overrides.clear()

"""Database configuration and session helpers."""

from __future__ import annotations

from typing import Any, Dict, Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from .config import DATA_DIR, DATABASE_URL


def create_db_engine(url: str) -> Engine:
    """Create an engine whose write transactions can be serialized.

    pysqlite issues its own ``BEGIN`` lazily and never a locking one, so for
    SQLite the driver's transaction handling is switched off and the
    ``begin`` event emits ``BEGIN`` itself, honouring the ``sqlite_begin``
    execution option (``DEFERRED`` unless asked otherwise).
    """

    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    engine = create_engine(url, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        mode = conn.get_execution_options().get("sqlite_begin", "DEFERRED")
        conn.exec_driver_sql(f"BEGIN {mode}")

    return engine


def write_options(engine: Engine) -> Dict[str, Any]:
    """Execution options for a transaction that must not interleave writers."""

    if engine.dialect.name == "sqlite":
        return {"sqlite_begin": "IMMEDIATE"}
    return {"isolation_level": "SERIALIZABLE"}


if DATABASE_URL.startswith(f"sqlite:///{DATA_DIR}"):
    DATA_DIR.mkdir(parents=True, exist_ok=True)

engine = create_db_engine(DATABASE_URL)


def get_session() -> Iterator[Session]:
    """FastAPI dependency that yields a database session."""

    with Session(engine) as session:
        yield session


__all__ = ["create_db_engine", "engine", "get_session", "write_options"]

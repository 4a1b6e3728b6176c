"""System-level API endpoints."""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ...core import get_session

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple liveness probe."""

    return {"ok": True}


@router.get("/healthz")
def healthz(session: Session = Depends(get_session)) -> Dict[str, bool]:
    """Readiness probe that checks the database answers."""

    try:
        session.connection().execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise HTTPException(503, "database unavailable") from exc
    return {"ok": True}


__all__ = ["router"]

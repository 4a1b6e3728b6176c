"""World-best score endpoints."""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request, Response
from fastapi.security import HTTPBasic

from ...core import CORS_MAX_AGE, engine, utcnow
from ...services import (
    ChampionError,
    ChampionService,
    ChampionStore,
    InvalidInput,
)

router = APIRouter(tags=["champion"])

_basic = HTTPBasic(auto_error=False)
_INTEGER = re.compile("[+-]?[0-9]+")

# Scores are stored in a signed 64-bit column.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def get_champion_service() -> ChampionService:
    """FastAPI dependency that yields the champion service."""

    return ChampionService(ChampionStore(engine))


async def caller_token(request: Request) -> str:
    """Return the token carried as the password of Basic credentials."""

    try:
        credentials = await _basic(request)
    except HTTPException:
        return ""
    return credentials.password if credentials else ""


def _fail(exc: ChampionError) -> HTTPException:
    return HTTPException(exc.status_code, str(exc))


def _form_value(request: Request, value: Optional[str], key: str) -> str:
    if value is None:
        value = request.query_params.get(key)
    return value or ""


def _parse_int(raw: str, field: str) -> int:
    if not _INTEGER.fullmatch(raw):
        raise InvalidInput(f"{field} must be an integer: {raw!r}")
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidInput(f"{field} is out of range: {raw!r}")
    return value


def _parse_float(raw: str, field: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidInput(f"{field} must be a number: {raw!r}") from exc
    if not math.isfinite(value):
        raise InvalidInput(f"{field} must be finite: {raw!r}")
    return value


@router.options("/champion")
def champion_options() -> Response:
    """Answer CORS preflight checks for the champion endpoint."""

    return Response(
        headers={
            "Access-Control-Allow-Methods": "GET, PUT, OPTIONS",
            "Access-Control-Allow-Headers": "Authorization",
            "Access-Control-Max-Age": str(CORS_MAX_AGE),
        }
    )


@router.get("/champion")
def get_champion(
    token: str = Depends(caller_token),
    service: ChampionService = Depends(get_champion_service),
) -> Dict[str, Any]:
    """Get the live champion and whether the caller may rename it."""

    try:
        return service.get_current_champion(utcnow(), token)
    except ChampionError as exc:
        raise _fail(exc) from exc


@router.put("/champion")
def put_champion(
    request: Request,
    score: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    replay: Optional[str] = Form(None),
    token: str = Depends(caller_token),
    service: ChampionService = Depends(get_champion_service),
) -> Dict[str, Any]:
    """Beat the champion when a score is given, otherwise rename it."""

    raw_score = _form_value(request, score, "score")
    try:
        if raw_score:
            return service.beat_champion(
                utcnow(),
                _parse_int(raw_score, "score"),
                _form_value(request, name, "name"),
                _parse_float(_form_value(request, duration, "duration"), "duration"),
                _form_value(request, replay, "replay"),
            )
        return service.rename_champion(
            utcnow(), _form_value(request, name, "name"), token
        )
    except ChampionError as exc:
        raise _fail(exc) from exc


__all__ = ["caller_token", "get_champion_service", "router"]

"""API assembly helpers."""

from __future__ import annotations

from typing import Iterable

from fastapi import APIRouter, FastAPI

from .routers import ALL_ROUTERS


def register_routes(app: FastAPI, routers: Iterable[APIRouter] = ALL_ROUTERS) -> None:
    """Attach the given routers, all of them by default, to the app."""

    for router in routers:
        app.include_router(router)


__all__ = ["register_routes"]

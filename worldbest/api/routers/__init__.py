"""Aggregate API routers."""

from fastapi import APIRouter

from .champion import router as champion_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    champion_router,
)

__all__ = ["ALL_ROUTERS"]

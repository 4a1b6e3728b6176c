"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from .api import register_routes
from .core import CHAMPION_ORIGIN, DB_RESET, LOG_LEVEL, engine, setup_logging
from .services import ChampionStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = ChampionStore(engine)
    if DB_RESET:
        logger.warning("DB_RESET is set; dropping champion records")
        store.drop_schema()
    store.create_schema()
    yield


def create_app() -> FastAPI:
    setup_logging(LOG_LEVEL)
    app = FastAPI(title="World-Best Score API", version="1.0.0", lifespan=lifespan)

    # Every champion response, errors and 405s included, names the one
    # origin allowed to read it. Preflights are answered by the router.
    @app.middleware("http")
    async def allow_champion_origin(request: Request, call_next):
        response = await call_next(request)
        if request.url.path == "/champion":
            response.headers["Access-Control-Allow-Origin"] = CHAMPION_ORIGIN
        return response

    register_routes(app)
    return app


app = create_app()

"""Application entrypoint: ``uvicorn app.main:app``."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.errors import setup_exception_handlers
from app.api.middleware import RequestIDMiddleware
from app.api.v1.router import get_api_router
from app.core.config import Config, get_config
from app.core.startup import bootstrap
from app.database.db import Database


def create_app(config: Config | None = None, database: Database | None = None) -> FastAPI:
    """Build the FastAPI application around one explicitly owned ``Database``."""
    cfg = config or (database.config if database else get_config())
    db = database or Database(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        bootstrap(db)
        yield
        db.dispose()

    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION, lifespan=lifespan)
    app.state.config = cfg
    app.state.database = db

    app.add_middleware(RequestIDMiddleware)
    setup_exception_handlers(app)
    app.include_router(get_api_router(cfg.API_PREFIX))

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_config()
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT)

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from core import errors, log, settings as settings_module
from core.db import Database
from core.schema import init_schema
from core.settings import Settings, load_settings
from users import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fails fast when DATABASE_URL is missing.
    settings: Settings = app.state.settings or load_settings()
    log.configure_logging(settings.log_level)

    database = Database(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        command_timeout=settings.command_timeout,
    )
    await database.connect()
    app.state.database = database
    try:
        if settings.bootstrap_schema:
            await init_schema(database)
        yield
    finally:
        await database.close()
        app.state.database = None


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.database = None

    origins = settings.cors_origins if settings is not None else settings_module.cors_origins()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    log.install_request_logging(app)
    errors.install_exception_handlers(app)

    app.include_router(users_router.router, tags=["users"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Hello"

    return app


app = create_app()


def run() -> None:
    settings = load_settings()
    log.configure_logging(settings.log_level)
    logger.info("Users API listening on port %s", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()

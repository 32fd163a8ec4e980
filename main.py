"""
Tee-time booking backend — application entry point.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_error_handlers
from api.tee_times import router as tee_times_router
from auth.jwt import TokenIssuer
from auth.routes import router as auth_router
from config.settings import Settings, config
from database.session import (
    build_engine,
    build_session_factory,
    check_connection,
    create_tables,
)
from database.tee_times import TeeTimeStore
from database.users import UserStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "asyncio", "httpx", "httpcore"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(
    settings: Optional[Settings] = None,
    user_store: Optional[UserStore] = None,
    tee_time_store: Optional[TeeTimeStore] = None,
) -> FastAPI:
    settings = settings or config
    settings.validate_secrets()
    configure_logging(settings)

    app = FastAPI(
        title="Tee-Time Booking Backend",
        version="1.0.0",
        description="Account signup/login and tee-time listings.",
    )

    engine = None
    if user_store is None or tee_time_store is None:
        engine = build_engine(settings)
        session_factory = build_session_factory(engine)
        user_store = user_store or UserStore(session_factory)
        tee_time_store = tee_time_store or TeeTimeStore(session_factory)

    app.state.settings = settings
    app.state.engine = engine
    app.state.user_store = user_store
    app.state.tee_time_store = tee_time_store
    app.state.token_issuer = TokenIssuer(
        settings.jwt_secret,
        expiry_seconds=settings.jwt_expiry_seconds,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.info(
            "%s %s %d %.1fms",
            request.method, request.url.path, response.status_code, elapsed * 1000,
        )
        return response

    register_error_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api")
    app.include_router(tee_times_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    @app.on_event("startup")
    async def on_startup():
        if engine is not None:
            if settings.db_create_tables:
                await create_tables(engine)
            if await check_connection(engine):
                logger.info("Connected to database")
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        if engine is not None:
            await engine.dispose()
            logger.info("Database engine disposed")

    return app


if __name__ == "__main__":
    uvicorn.run(
        "main:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )

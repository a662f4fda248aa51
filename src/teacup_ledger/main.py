# src/teacup_ledger/main.py
"""Main entry point for the TeaCup ledger API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker

from teacup_ledger.api.v1 import (
    conversations_router,
    posts_router,
    rewards_router,
    system_router,
    users_router,
)
from teacup_ledger.core.settings import Settings, settings
from teacup_ledger.db.session import SessionLocal, create_tables
from teacup_ledger.services.errors import LedgerError
from teacup_ledger.services.events import EventDispatcher, EventLog
from teacup_ledger.services.ledger import Clock, LedgerService

logger = logging.getLogger(__name__)


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Translate rejected ledger operations into HTTP errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


def create_app(
    config: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
    *,
    clock: Clock | None = None,
) -> FastAPI:
    """Build the API around a freshly constructed ledger service."""
    config = config or settings
    if session_factory is None:
        create_tables()
        session_factory = SessionLocal

    event_log = EventLog(maxlen=config.event_log_size)
    overrides: dict[str, object] = {"dispatcher": EventDispatcher([event_log])}
    if clock is not None:
        overrides["clock"] = clock
    ledger = LedgerService.from_settings(session_factory, config, **overrides)

    app = FastAPI(
        title=config.app_name,
        description="Conversation and community ledger with periodic rewards",
        version=config.app_version,
    )
    app.state.settings = config
    app.state.ledger = ledger
    app.state.event_log = event_log

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=config.cors_allow_methods,
        allow_headers=config.cors_allow_headers,
    )
    app.add_middleware(GZipMiddleware)
    app.add_exception_handler(LedgerError, ledger_error_handler)  # type: ignore[arg-type]

    app.include_router(conversations_router, prefix="/api/v1")
    app.include_router(posts_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(rewards_router, prefix="/api/v1")
    app.include_router(system_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": config.app_name,
            "version": config.app_version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    logger.info("TeaCup ledger API ready (admin=%s)", ledger.admin_account)
    return app


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "teacup_ledger.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()

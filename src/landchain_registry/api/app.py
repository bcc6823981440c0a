"""
landchain_registry.api.app

FastAPI app factory for the land registry service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine, ledger, outbound HTTP client).
- Seed the demo accounts when enabled.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from landchain_registry import __version__
from landchain_registry.api.errors import install_error_handlers
from landchain_registry.api.routers.data import router as data_router
from landchain_registry.api.routers.escrows import router as escrows_router
from landchain_registry.api.routers.health import router as health_router
from landchain_registry.api.routers.offers import router as offers_router
from landchain_registry.api.routers.prediction import router as prediction_router
from landchain_registry.api.routers.properties import router as properties_router
from landchain_registry.api.routers.sepolia import router as sepolia_router
from landchain_registry.api.routers.transactions import router as transactions_router
from landchain_registry.api.routers.users import router as users_router
from landchain_registry.db.init_db import init_db
from landchain_registry.db.session import create_engine, create_sessionmaker, session_scope
from landchain_registry.ledger.base import Ledger
from landchain_registry.ledger.factory import connect_ledger
from landchain_registry.observability.logging import configure_logging, get_logger
from landchain_registry.observability.middleware import RequestContextMiddleware
from landchain_registry.services.users import UserService
from landchain_registry.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    ledger: Ledger | None = None,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the application.

    `ledger` overrides the ledger chosen by `settings.ledger_mode`; `http_transport`
    backs the outbound client used for the AI gateway. Both exist so
    tests can run without a Fabric network or internet access.
    """
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schemas are managed by Alembic.
            await init_db(engine)

        app.state.ledger = ledger if ledger is not None else await connect_ledger(settings)
        app.state.http = httpx.AsyncClient(transport=http_transport)

        if settings.seed_demo_users:
            async with session_scope(app.state.sessionmaker) as session:
                users = UserService(session=session, ledger=app.state.ledger)
                created = await users.seed_demo_users()
            log.info("demo_users_seeded", created=created)

        log.info("ready", ledger_mode=app.state.ledger.mode)
        try:
            yield
        finally:
            await app.state.http.aclose()
            await app.state.ledger.close()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Land Registry Service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(users_router)
    app.include_router(properties_router)
    app.include_router(offers_router)
    app.include_router(transactions_router)
    app.include_router(escrows_router)
    app.include_router(data_router)
    app.include_router(prediction_router)
    app.include_router(sepolia_router)
    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; business rules live in services, chaincode access
# in `landchain_registry.ledger`.

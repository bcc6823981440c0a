"""
landchain_registry.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose the app's settings, DB sessions, ledger and outbound HTTP client.
- Build request-scoped services on top of them.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from landchain_registry.ledger.base import Ledger
from landchain_registry.services.escrows import EscrowService
from landchain_registry.services.offers import OfferService
from landchain_registry.services.properties import PropertyService
from landchain_registry.services.transactions import TransactionService
from landchain_registry.services.users import UserService
from landchain_registry.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The settings the app was built with (tests build apps with custom settings).
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


def ledger_dep(request: Request) -> Ledger:
    # Chosen once at startup (Fabric or mock); see `ledger.factory.connect_ledger`.
    return request.app.state.ledger  # type: ignore[attr-defined]


def http_dep(request: Request) -> httpx.AsyncClient:
    return request.app.state.http  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Services commit; anything uncommitted is rolled back on close.
    async with session_factory() as session:
        yield session


def user_service(
    session: AsyncSession = Depends(db_session), ledger: Ledger = Depends(ledger_dep)
) -> UserService:
    return UserService(session=session, ledger=ledger)


def property_service(
    session: AsyncSession = Depends(db_session), ledger: Ledger = Depends(ledger_dep)
) -> PropertyService:
    return PropertyService(session=session, ledger=ledger)


def offer_service(
    session: AsyncSession = Depends(db_session), ledger: Ledger = Depends(ledger_dep)
) -> OfferService:
    return OfferService(session=session, ledger=ledger)


def escrow_service(
    session: AsyncSession = Depends(db_session), ledger: Ledger = Depends(ledger_dep)
) -> EscrowService:
    return EscrowService(session=session, ledger=ledger)


def transaction_service(session: AsyncSession = Depends(db_session)) -> TransactionService:
    return TransactionService(session=session)


# --- Module Notes -----------------------------------------------------------
# Services are built per request around the request's session; the ledger and
# the outbound HTTP client are process-wide and live on app.state.

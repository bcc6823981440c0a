"""
landchain_registry.services.escrows

Escrow account service (CREATED -> FUNDED -> RELEASED, or CANCELLED).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.models import Escrow, EscrowStatus, utcnow
from landchain_registry.db.repositories.escrows import EscrowRepo
from landchain_registry.db.repositories.properties import PropertyRepo
from landchain_registry.errors import ConflictError, InvalidTransitionError, NotFoundError
from landchain_registry.ledger.base import ESCROW_CONTRACT, Ledger
from landchain_registry.observability.logging import get_logger
from landchain_registry.services.ids import new_id

log = get_logger(__name__)


class EscrowService:
    def __init__(self, *, session: AsyncSession, ledger: Ledger) -> None:
        self._session = session
        self._ledger = ledger
        self._escrows = EscrowRepo(session)
        self._properties = PropertyRepo(session)

    async def _load(self, escrow_id: str, *, for_update: bool = True) -> Escrow:
        escrow = await self._escrows.get(escrow_id, for_update=for_update)
        if escrow is None:
            raise NotFoundError("Escrow", escrow_id)
        return escrow

    async def create(
        self,
        *,
        property_id: str,
        buyer: str,
        seller: str,
        amount: float,
        escrow_id: str | None = None,
    ) -> Escrow:
        if await self._properties.get(property_id) is None:
            raise NotFoundError("Property", property_id)
        escrow_id = escrow_id or new_id("ESCROW")
        if await self._escrows.get(escrow_id) is not None:
            raise ConflictError(f"escrow {escrow_id} already exists")

        await self._ledger.submit(
            ESCROW_CONTRACT, "CreateEscrow", escrow_id, property_id, buyer, seller, amount
        )
        escrow = await self._escrows.create(
            escrow_id=escrow_id, property_id=property_id, buyer=buyer, seller=seller, amount=amount
        )
        await self._session.commit()
        log.info("escrow_created", escrow_id=escrow_id, property_id=property_id)
        return escrow

    async def get(self, escrow_id: str) -> Escrow:
        return await self._load(escrow_id, for_update=False)

    async def list(self, *, property_id: str | None = None) -> list[Escrow]:
        return await self._escrows.list(property_id=property_id)

    async def fund(self, escrow_id: str, *, tx_hash: str) -> Escrow:
        escrow = await self._load(escrow_id)
        if escrow.status != EscrowStatus.created:
            raise InvalidTransitionError("Escrow", escrow_id, escrow.status.value, "fund")
        await self._ledger.submit(ESCROW_CONTRACT, "FundEscrow", escrow_id, tx_hash)
        return await self._move(escrow, EscrowStatus.funded, tx_hash)

    async def release(self, escrow_id: str, *, tx_hash: str) -> Escrow:
        escrow = await self._load(escrow_id)
        if escrow.status != EscrowStatus.funded:
            raise InvalidTransitionError("Escrow", escrow_id, escrow.status.value, "release")
        await self._ledger.submit(ESCROW_CONTRACT, "ReleaseEscrow", escrow_id, tx_hash)
        return await self._move(escrow, EscrowStatus.released, tx_hash)

    async def cancel(self, escrow_id: str, *, tx_hash: str = "") -> Escrow:
        escrow = await self._load(escrow_id)
        if escrow.status in (EscrowStatus.released, EscrowStatus.cancelled):
            raise InvalidTransitionError("Escrow", escrow_id, escrow.status.value, "cancel")
        await self._ledger.submit(ESCROW_CONTRACT, "CancelEscrow", escrow_id, tx_hash)
        return await self._move(escrow, EscrowStatus.cancelled, tx_hash)

    async def _move(self, escrow: Escrow, status: EscrowStatus, tx_hash: str) -> Escrow:
        escrow.status = status
        escrow.transaction_hash = tx_hash
        escrow.updated_at = utcnow()
        await self._session.commit()
        log.info("escrow_status_changed", escrow_id=escrow.escrow_id, status=status.value)
        return escrow

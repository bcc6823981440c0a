"""
landchain_registry.ledger.mock

In-process ledger used when no Fabric network is reachable.

Responsibilities:
- Accept every submit and record it as an invocation with a synthetic tx id.
- Answer queries with an empty result (the registry DB is the read model).
"""

from __future__ import annotations

import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from landchain_registry.ledger.base import LedgerMode, chaincode_args
from landchain_registry.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Invocation:
    tx_id: str
    contract: str
    fn: str
    args: list[str]
    submitted_at: datetime


@dataclass
class MockLedger:
    # Keeps only the most recent `history` invocations.
    history: int = 1000
    invocations: deque[Invocation] = field(init=False)

    def __post_init__(self) -> None:
        self.invocations = deque(maxlen=self.history)

    @property
    def mode(self) -> LedgerMode:
        return "MOCK"

    async def submit(self, contract: str, fn: str, *args: Any) -> dict[str, Any]:
        inv = Invocation(
            tx_id=f"tx_{uuid.uuid4().hex}",
            contract=contract,
            fn=fn,
            args=chaincode_args(*args),
            submitted_at=datetime.now(tz=UTC),
        )
        self.invocations.append(inv)
        log.debug("mock_ledger_submit", contract=contract, fn=fn, tx_id=inv.tx_id)
        return {"txId": inv.tx_id, "status": "SUCCESS", "payload": inv.args}

    async def evaluate(self, contract: str, fn: str, *args: Any) -> Any:
        log.debug("mock_ledger_evaluate", contract=contract, fn=fn)
        return []

    async def close(self) -> None:
        return None

    def calls(self, fn: str) -> list[Invocation]:
        return [i for i in self.invocations if i.fn == fn]

"""
landchain_registry.ledger.base

Ledger interface shared by the Fabric and mock implementations.
"""

from __future__ import annotations

from typing import Any, Literal, Protocol

LedgerMode = Literal["FABRIC", "MOCK"]

# Chaincode names deployed on the `landregistry` channel.
USER_CONTRACT = "user-contract"
PROPERTY_CONTRACT = "property-contract"
OFFER_CONTRACT = "offer-contract"
ESCROW_CONTRACT = "escrow-contract"


class Ledger(Protocol):
    @property
    def mode(self) -> LedgerMode: ...

    async def submit(self, contract: str, fn: str, *args: Any) -> dict[str, Any]:
        """Invoke a state-changing chaincode function."""
        ...

    async def evaluate(self, contract: str, fn: str, *args: Any) -> Any:
        """Run a read-only chaincode query."""
        ...

    async def close(self) -> None: ...


def chaincode_args(*args: Any) -> list[str]:
    # Chaincode arguments travel as strings; booleans use Go's strconv spelling.
    out: list[str] = []
    for a in args:
        if isinstance(a, bool):
            out.append("true" if a else "false")
        elif a is None:
            out.append("")
        else:
            out.append(str(a))
    return out

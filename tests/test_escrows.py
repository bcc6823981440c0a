"""
tests.test_escrows

Escrow lifecycle: CREATED -> FUNDED -> RELEASED, with cancellation.
"""

from __future__ import annotations

import httpx
import pytest

from helpers import register_property
from landchain_registry.ledger.mock import MockLedger


async def _create_escrow(client: httpx.AsyncClient, escrow_id: str) -> dict:
    r = await client.post(
        "/api/escrows",
        json={
            "escrowId": escrow_id,
            "propertyId": "PROP_1",
            "buyer": "BUYER_1",
            "seller": "SELLER_1",
            "amount": 4_000_000,
        },
    )
    assert r.status_code == 200, r.text
    return r.json()["data"]


@pytest.mark.asyncio
async def test_escrow_lifecycle(client: httpx.AsyncClient, ledger: MockLedger) -> None:
    await register_property(client, propertyId="PROP_1")
    escrow = await _create_escrow(client, "ESCROW_1")
    assert escrow["status"] == "CREATED"

    r = await client.put("/api/escrows/ESCROW_1/release", json={"txHash": "0xfeed"})
    assert r.status_code == 409

    r = await client.put("/api/escrows/ESCROW_1/fund", json={"txHash": "0xabc"})
    assert r.json()["data"]["status"] == "FUNDED"
    assert r.json()["data"]["transactionHash"] == "0xabc"

    r = await client.put("/api/escrows/ESCROW_1/release", json={"txHash": "0xdef"})
    assert r.json()["data"]["status"] == "RELEASED"

    r = await client.put("/api/escrows/ESCROW_1/cancel")
    assert r.status_code == 409

    assert [c.fn for c in ledger.invocations if c.contract == "escrow-contract"] == [
        "CreateEscrow",
        "FundEscrow",
        "ReleaseEscrow",
    ]


@pytest.mark.asyncio
async def test_cancel_and_list_escrows(client: httpx.AsyncClient) -> None:
    await register_property(client, propertyId="PROP_1")
    await _create_escrow(client, "ESCROW_1")
    await _create_escrow(client, "ESCROW_2")

    r = await client.put("/api/escrows/ESCROW_2/cancel", json={"txHash": "0x1"})
    assert r.json()["data"]["status"] == "CANCELLED"

    r = await client.get("/api/escrows", params={"propertyId": "PROP_1"})
    assert sorted(e["escrowId"] for e in r.json()["data"]) == ["ESCROW_1", "ESCROW_2"]

    r = await client.get("/api/escrows/ESCROW_1")
    assert r.json()["data"]["status"] == "CREATED"


@pytest.mark.asyncio
async def test_escrow_requires_known_property(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/escrows",
        json={"propertyId": "PROP_404", "buyer": "B", "seller": "S", "amount": 1},
    )
    assert r.status_code == 404

    r = await client.get("/api/escrows/ESCROW_404")
    assert r.status_code == 404

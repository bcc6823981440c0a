"""
tests.test_offers

Offer status machine: happy path, guards, and the audit trail it leaves.
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from helpers import register_property, verified_property
from landchain_registry.ledger.mock import MockLedger

SEPOLIA_HASH = "0x" + "ab" * 32


async def _create_offer(client: httpx.AsyncClient, **fields: Any) -> dict[str, Any]:
    body = {
        "propertyId": "PROP_1",
        "buyerId": "BUYER_1",
        "buyerName": "Priya Sharma",
        "offerAmount": 4_000_000,
        "message": "Ready to close this month",
        **fields,
    }
    r = await client.post("/api/offers/create", json=body)
    assert r.status_code == 200, r.text
    return r.json()["data"]


@pytest.mark.asyncio
async def test_full_offer_flow_transfers_property(
    client: httpx.AsyncClient, ledger: MockLedger
) -> None:
    await verified_property(client, propertyId="PROP_1")
    offer = await _create_offer(client, offerId="OFFER_1")
    assert offer["status"] == "PENDING"
    assert offer["sellerId"] == "SELLER_1"
    assert offer["sellerName"] == "Ramesh Kumar"
    assert offer["adminVerified"] is False

    r = await client.put("/api/offers/OFFER_1/accept")
    assert r.json()["data"]["status"] == "ACCEPTED"

    r = await client.get("/api/offers/pending-verification")
    assert [o["offerId"] for o in r.json()["data"]] == ["OFFER_1"]

    r = await client.put(
        "/api/offers/OFFER_1/verify",
        json={"adminId": "ADMIN_001", "sepoliaTxHash": SEPOLIA_HASH},
    )
    data = r.json()["data"]
    assert data["status"] == "ADMIN_VERIFIED"
    assert data["adminVerified"] is True
    assert data["adminId"] == "ADMIN_001"
    assert data["sepoliaTxHash"] == SEPOLIA_HASH

    r = await client.put("/api/offers/OFFER_1/complete")
    assert r.json()["data"]["status"] == "COMPLETED"

    r = await client.get("/api/properties/PROP_1")
    prop = r.json()["data"]
    assert prop["owner"] == "BUYER_1"
    assert prop["status"] == "TRANSFERRED"

    r = await client.get("/api/offers/OFFER_1/history")
    history = r.json()["data"]
    assert [(t["type"], t["status"]) for t in history] == [
        ("OFFER_CREATED", "PENDING"),
        ("OFFER_ACCEPTED", "PENDING"),
        ("OFFER_VERIFIED", "VERIFIED"),
        ("PROPERTY_TRANSFERRED", "COMPLETED"),
    ]
    assert history[0]["fromOwner"] == "BUYER_1"
    assert history[0]["toOwner"] == "SELLER_1"
    assert history[-1]["fromOwner"] == "SELLER_1"
    assert history[-1]["toOwner"] == "BUYER_1"

    assert [c.fn for c in ledger.invocations if c.contract == "offer-contract"] == [
        "CreateOffer",
        "AcceptOffer",
        "AdminVerifyOffer",
        "CompleteOffer",
    ]


@pytest.mark.asyncio
async def test_complete_without_transfer_keeps_owner(client: httpx.AsyncClient) -> None:
    await verified_property(client, propertyId="PROP_1")
    await _create_offer(client, offerId="OFFER_1")
    await client.put("/api/offers/OFFER_1/accept")
    await client.put("/api/offers/OFFER_1/verify", json={"adminId": "ADMIN_001"})

    r = await client.put("/api/offers/OFFER_1/complete", json={"transfer": False})
    assert r.json()["data"]["status"] == "COMPLETED"

    r = await client.get("/api/properties/PROP_1")
    assert r.json()["data"]["owner"] == "SELLER_1"

    r = await client.get("/api/transactions", params={"offerId": "OFFER_1"})
    assert r.json()["data"][-1]["type"] == "PROPERTY_TRANSFERRED"


@pytest.mark.asyncio
async def test_complete_after_manual_transfer_does_not_transfer_again(
    client: httpx.AsyncClient, ledger: MockLedger
) -> None:
    await verified_property(client, propertyId="PROP_1")
    await _create_offer(client, offerId="OFFER_1")
    await client.put("/api/offers/OFFER_1/accept")
    await client.put("/api/offers/OFFER_1/verify", json={"adminId": "ADMIN_001"})

    # The admin dashboard transfers the title first, then completes the offer.
    r = await client.put(
        "/api/properties/PROP_1/transfer",
        json={"newOwner": "BUYER_1", "newOwnerName": "Priya Sharma"},
    )
    assert r.status_code == 200, r.text

    r = await client.put("/api/offers/OFFER_1/complete")
    assert r.status_code == 200, r.text
    assert r.json()["data"]["status"] == "COMPLETED"

    r = await client.get("/api/properties/PROP_1")
    assert r.json()["data"]["owner"] == "BUYER_1"
    assert len(ledger.calls("TransferProperty")) == 1

    r = await client.get("/api/transactions", params={"offerId": "OFFER_1"})
    transferred = [t for t in r.json()["data"] if t["type"] == "PROPERTY_TRANSFERRED"]
    assert len(transferred) == 1
    assert transferred[0]["toOwner"] == "BUYER_1"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "body"),
    [
        ("verify", {"adminId": "ADMIN_001"}),
        ("complete", None),
    ],
)
async def test_out_of_order_transitions_are_rejected(
    client: httpx.AsyncClient, ledger: MockLedger, path: str, body: dict[str, Any] | None
) -> None:
    await verified_property(client, propertyId="PROP_1")
    await _create_offer(client, offerId="OFFER_1")
    submitted = len(ledger.invocations)

    r = await client.put(f"/api/offers/OFFER_1/{path}", json=body)
    assert r.status_code == 409
    assert r.json()["success"] is False
    assert "in status PENDING" in r.json()["error"]
    # Guards run before the ledger is touched.
    assert len(ledger.invocations) == submitted


@pytest.mark.asyncio
async def test_reject_and_cancel(client: httpx.AsyncClient) -> None:
    await verified_property(client, propertyId="PROP_1")
    await _create_offer(client, offerId="OFFER_1")
    await _create_offer(client, offerId="OFFER_2")

    r = await client.put("/api/offers/OFFER_1/reject")
    assert r.json()["data"]["status"] == "REJECTED"
    r = await client.put("/api/offers/OFFER_1/accept")
    assert r.status_code == 409

    r = await client.put("/api/offers/OFFER_2/accept")
    r = await client.put("/api/offers/OFFER_2/cancel")
    assert r.json()["data"]["status"] == "CANCELLED"
    r = await client.put("/api/offers/OFFER_2/cancel")
    assert r.status_code == 409

    r = await client.get("/api/offers/OFFER_2/history")
    assert r.json()["data"][-1]["type"] == "OFFER_CANCELLED"
    assert r.json()["data"][-1]["status"] == "CANCELLED"


@pytest.mark.asyncio
async def test_create_offer_validation(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/offers/create",
        json={"propertyId": "PROP_404", "buyerId": "BUYER_1", "offerAmount": 10},
    )
    assert r.status_code == 404

    await register_property(client, propertyId="PROP_1")
    r = await client.post(
        "/api/offers/create",
        json={"propertyId": "PROP_1", "buyerId": "SELLER_1", "offerAmount": 10},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "buyer and seller must be different users"

    r = await client.post(
        "/api/offers/create",
        json={"propertyId": "PROP_1", "buyerId": "BUYER_1", "offerAmount": -5},
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_admin_verify_checks_tx_hash(client: httpx.AsyncClient) -> None:
    await verified_property(client, propertyId="PROP_1")
    await _create_offer(client, offerId="OFFER_1")
    await client.put("/api/offers/OFFER_1/accept")

    r = await client.put(
        "/api/offers/OFFER_1/verify", json={"adminId": "ADMIN_001", "sepoliaTxHash": "0x123"}
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_offer_queries(client: httpx.AsyncClient) -> None:
    await verified_property(client, propertyId="PROP_1")
    await verified_property(client, propertyId="PROP_2", owner="SELLER_2")
    await _create_offer(client, offerId="OFFER_1")
    await _create_offer(client, offerId="OFFER_2", propertyId="PROP_2", buyerId="BUYER_2")

    r = await client.get("/api/offers", params={"buyerId": "BUYER_2"})
    assert [o["offerId"] for o in r.json()["data"]] == ["OFFER_2"]

    r = await client.get("/api/offers", params={"sellerId": "SELLER_1"})
    assert [o["offerId"] for o in r.json()["data"]] == ["OFFER_1"]

    r = await client.get("/api/offers", params={"propertyId": "PROP_2", "status": "PENDING"})
    assert [o["offerId"] for o in r.json()["data"]] == ["OFFER_2"]

    r = await client.get("/api/transactions", params={"userId": "BUYER_2"})
    assert [t["type"] for t in r.json()["data"]] == ["OFFER_CREATED"]

    r = await client.get("/api/offers/OFFER_404")
    assert r.status_code == 404

"""
tests.helpers

API-level setup helpers shared by the test modules.
"""

from __future__ import annotations

from typing import Any

import httpx


async def register_user(client: httpx.AsyncClient, **fields: Any) -> dict[str, Any]:
    body = {
        "name": "Test User",
        "email": f"{fields.get('userId', 'user').lower()}@example.com",
        "password": "secret123",
        "role": "BUYER",
        **fields,
    }
    r = await client.post("/api/users/register", json=body)
    assert r.status_code == 200, r.text
    return r.json()["data"]


async def register_property(client: httpx.AsyncClient, **fields: Any) -> dict[str, Any]:
    body = {
        "owner": "SELLER_1",
        "ownerName": "Ramesh Kumar",
        "location": "Tiruchanur, Tirupati Rural",
        "area": 1200,
        "price": 4_200_000,
        "propertyType": "Residential",
        **fields,
    }
    r = await client.post("/api/properties/register", json=body)
    assert r.status_code == 200, r.text
    return r.json()["data"]


async def verified_property(client: httpx.AsyncClient, **fields: Any) -> dict[str, Any]:
    prop = await register_property(client, **fields)
    r = await client.put(
        f"/api/properties/{prop['propertyId']}/verify", json={"verifierId": "ADMIN_001"}
    )
    assert r.status_code == 200, r.text
    return r.json()["data"]

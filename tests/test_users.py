"""
tests.test_users

Registration, login/token and KYC document flows.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import httpx
import pytest

from helpers import register_user
from landchain_registry.db.models import utcnow
from landchain_registry.ledger.mock import MockLedger
from landchain_registry.services.users import encode_password


@pytest.mark.asyncio
async def test_register_user_mirrors_to_ledger(
    client: httpx.AsyncClient, ledger: MockLedger
) -> None:
    user = await register_user(
        client, userId="BUYER_1", name="Priya Sharma", role="BUYER", aadhar="1234-5678-9012"
    )
    assert user["userId"] == "BUYER_1"
    assert user["isVerified"] is False
    assert user["documents"] == []
    assert "passwordHash" not in user

    (call,) = ledger.calls("RegisterUser")
    assert call.contract == "user-contract"
    assert call.args[0] == "BUYER_1"
    assert call.args[7] == "BUYER"
    assert call.args[9] == encode_password("secret123")


@pytest.mark.asyncio
async def test_register_generates_id_and_rejects_duplicate_email(
    client: httpx.AsyncClient,
) -> None:
    r = await client.post(
        "/api/users/register",
        json={"name": "A", "email": "dup@example.com", "password": "x", "role": "SELLER"},
    )
    assert r.status_code == 200
    assert r.json()["userId"].startswith("USER_")

    r = await client.post(
        "/api/users/register",
        json={"name": "B", "email": "DUP@example.com", "password": "y", "role": "BUYER"},
    )
    assert r.status_code == 409
    assert r.json()["success"] is False
    assert "already registered" in r.json()["error"]


@pytest.mark.asyncio
async def test_register_requires_a_credential(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/users/register", json={"name": "A", "email": "a@example.com", "role": "BUYER"}
    )
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "password or passwordHash is required"}


@pytest.mark.asyncio
async def test_register_accepts_frontend_password_hash(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/users/register",
        json={
            "name": "A",
            "email": "a@example.com",
            "role": "BUYER",
            "passwordHash": encode_password("pw-from-browser"),
        },
    )
    assert r.status_code == 200

    r = await client.post(
        "/api/users/login", json={"email": "a@example.com", "password": "pw-from-browser"}
    )
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_login_issues_token_for_me(client: httpx.AsyncClient, ledger: MockLedger) -> None:
    await register_user(client, userId="SELLER_1", email="ramesh@example.com", role="SELLER")

    r = await client.post(
        "/api/users/login", json={"email": "ramesh@example.com", "password": "secret123"}
    )
    assert r.status_code == 200
    body = r.json()
    assert body["data"]["userId"] == "SELLER_1"
    assert body["data"]["lastLogin"] is not None
    assert body["tokenType"] == "bearer"
    assert len(ledger.calls("UpdateLastLogin")) == 1

    r = await client.get(
        "/api/users/me", headers={"Authorization": f"Bearer {body['accessToken']}"}
    )
    assert r.status_code == 200
    assert r.json()["data"]["email"] == "ramesh@example.com"


@pytest.mark.asyncio
async def test_login_rejects_bad_password(client: httpx.AsyncClient) -> None:
    await register_user(client, userId="SELLER_1", email="ramesh@example.com")

    r = await client.post(
        "/api/users/login", json={"email": "ramesh@example.com", "password": "wrong"}
    )
    assert r.status_code == 401
    assert r.json() == {"success": False, "error": "Invalid email or password"}


@pytest.mark.asyncio
async def test_me_requires_valid_token(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/users/me")
    assert r.status_code == 401
    assert r.json() == {"success": False, "error": "Missing bearer token"}

    r = await client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["success"] is False
    assert r.json()["error"].startswith("Invalid token: ")


@pytest.mark.asyncio
async def test_list_and_get_users(client: httpx.AsyncClient) -> None:
    await register_user(client, userId="SELLER_1", role="SELLER")
    await register_user(client, userId="BUYER_1", role="BUYER")

    r = await client.get("/api/users", params={"role": "SELLER"})
    assert [u["userId"] for u in r.json()["data"]] == ["SELLER_1"]

    r = await client.get("/api/users/BUYER_1")
    assert r.json()["data"]["role"] == "BUYER"

    r = await client.get("/api/users/NOPE")
    assert r.status_code == 404
    assert r.json()["error"] == "User NOPE not found"


@pytest.mark.asyncio
async def test_document_upload_and_verification(
    client: httpx.AsyncClient, ledger: MockLedger
) -> None:
    await register_user(client, userId="BUYER_1")

    r = await client.post(
        "/api/users/BUYER_1/documents",
        json={"documentId": "DOC_1", "documentType": "AADHAR", "documentHash": "Qm123"},
    )
    assert r.status_code == 200
    (doc,) = r.json()["data"]["documents"]
    assert doc["documentId"] == "DOC_1"
    assert doc["isVerified"] is False

    r = await client.post(
        "/api/users/BUYER_1/documents/DOC_1/verify", json={"adminId": "ADMIN_001"}
    )
    assert r.status_code == 200
    user = r.json()["data"]
    assert user["isVerified"] is True
    assert user["documents"][0]["verifiedBy"] == "ADMIN_001"
    assert ledger.calls("VerifyDocument")[0].args == ["BUYER_1", "DOC_1", "ADMIN_001"]

    r = await client.post(
        "/api/users/BUYER_1/documents/DOC_404/verify", json={"adminId": "ADMIN_001"}
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_document_verify_needs_an_admin(client: httpx.AsyncClient) -> None:
    await register_user(client, userId="BUYER_1")
    await client.post(
        "/api/users/BUYER_1/documents",
        json={"documentId": "DOC_1", "documentType": "PAN", "documentHash": "Qm1"},
    )

    r = await client.post("/api/users/BUYER_1/documents/DOC_1/verify")
    assert r.status_code == 400
    assert r.json()["error"] == "adminId is required"


@pytest.mark.asyncio
async def test_set_verification_flag(client: httpx.AsyncClient, ledger: MockLedger) -> None:
    await register_user(client, userId="BUYER_1")

    r = await client.put("/api/users/BUYER_1/verification", json={"isVerified": True})
    assert r.json()["data"]["isVerified"] is True
    assert ledger.calls("UpdateUserVerification")[0].args == ["BUYER_1", "true"]


@pytest.mark.asyncio
async def test_demo_users_are_seeded(client_factory) -> None:
    async with client_factory(seed_demo_users=True) as client:
        r = await client.get("/api/users")
        assert {u["userId"] for u in r.json()["data"]} == {"ADMIN_001", "SELLER_001", "BUYER_001"}

        r = await client.post(
            "/api/users/login",
            json={"email": "admin@landregistry.gov", "password": "admin123"},
        )
        assert r.status_code == 200
        assert r.json()["data"]["role"] == "ADMIN"


def test_utcnow_is_naive_utc() -> None:
    now = utcnow()

    assert now.tzinfo is None
    assert abs(datetime.now(UTC).replace(tzinfo=None) - now) < timedelta(seconds=5)


@pytest.mark.asyncio
async def test_registered_at_is_wall_clock_utc(client: httpx.AsyncClient) -> None:
    before = utcnow()
    user = await register_user(client, userId="BUYER_1")

    registered = datetime.fromisoformat(user["registeredAt"])
    assert registered.tzinfo is None
    assert before - timedelta(seconds=1) <= registered <= utcnow() + timedelta(seconds=1)

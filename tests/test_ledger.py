"""
tests.test_ledger

Ledger gateway: argument encoding, mock ledger, Fabric REST client, startup
selection/fallback, wallet files and admin enrollment.
"""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from landchain_registry.errors import LedgerError
from landchain_registry.ledger.base import PROPERTY_CONTRACT, chaincode_args
from landchain_registry.ledger.enroll import enroll_admin, main
from landchain_registry.ledger.fabric import FabricLedger
from landchain_registry.ledger.factory import connect_ledger
from landchain_registry.ledger.mock import MockLedger
from landchain_registry.ledger.wallet import FileSystemWallet, X509Identity, load_admin_from_msp
from landchain_registry.settings import get_settings

IDENTITY = X509Identity(msp_id="Org1MSP", certificate="-----CERT-----", private_key="-----KEY-----")


def _write_msp(root: Path) -> Path:
    msp = root / "msp"
    (msp / "signcerts").mkdir(parents=True)
    (msp / "keystore").mkdir()
    (msp / "signcerts" / "Admin@org1.landregistry.com-cert.pem").write_text("-----CERT-----")
    (msp / "keystore" / "priv_sk").write_text("-----KEY-----")
    return msp


def _fabric(transport: httpx.MockTransport) -> FabricLedger:
    http = httpx.AsyncClient(base_url="http://gateway", transport=transport)
    return FabricLedger(
        http=http, channel="landregistry", identity_label="admin", identity=IDENTITY
    )


def _fabric_ready(tmp_path: Path, make_settings, **overrides):
    profile = tmp_path / "connection-profile.json"
    profile.write_text("{}")
    FileSystemWallet(tmp_path / "wallet").put("admin", IDENTITY)
    return make_settings(fabric_gateway_url="http://gateway", **overrides)


def test_chaincode_args_are_strings() -> None:
    assert chaincode_args("P1", 1200.5, 3, True, False, None) == [
        "P1",
        "1200.5",
        "3",
        "true",
        "false",
        "",
    ]


@pytest.mark.asyncio
async def test_mock_ledger_records_invocations() -> None:
    ledger = MockLedger()
    result = await ledger.submit(PROPERTY_CONTRACT, "VerifyProperty", "PROP_1", "ADMIN_001")

    assert result["status"] == "SUCCESS"
    assert result["txId"].startswith("tx_")
    assert result["payload"] == ["PROP_1", "ADMIN_001"]
    assert ledger.mode == "MOCK"
    assert [i.fn for i in ledger.invocations] == ["VerifyProperty"]
    assert await ledger.evaluate(PROPERTY_CONTRACT, "GetAllProperties") == []


@pytest.mark.asyncio
async def test_fabric_ledger_submit_and_evaluate() -> None:
    seen: list[tuple[str, dict]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        seen.append((request.url.path, body))
        if request.url.path.endswith("/evaluate"):
            return httpx.Response(200, json=[{"propertyId": "PROP_1"}])
        return httpx.Response(200)

    ledger = _fabric(httpx.MockTransport(handler))
    try:
        assert await ledger.submit(PROPERTY_CONTRACT, "UpdatePropertyPrice", "PROP_1", 10.0) == {}
        rows = await ledger.evaluate(PROPERTY_CONTRACT, "GetPropertiesByOwner", "SELLER_1")
    finally:
        await ledger.close()

    assert rows == [{"propertyId": "PROP_1"}]
    path, body = seen[0]
    assert path == "/channels/landregistry/chaincodes/property-contract/submit"
    assert body == {
        "fn": "UpdatePropertyPrice",
        "args": ["PROP_1", "10.0"],
        "identity": "admin",
        "mspId": "Org1MSP",
    }


@pytest.mark.asyncio
async def test_fabric_ledger_surfaces_chaincode_errors() -> None:
    transport = httpx.MockTransport(
        lambda _: httpx.Response(500, json={"error": "Property PROP_9 does not exist"})
    )
    ledger = _fabric(transport)

    with pytest.raises(LedgerError, match="PROP_9 does not exist"):
        await ledger.submit(PROPERTY_CONTRACT, "VerifyProperty", "PROP_9", "ADMIN_001")
    await ledger.close()


@pytest.mark.asyncio
async def test_connect_ledger_modes(make_settings, tmp_path: Path) -> None:
    ledger = await connect_ledger(make_settings(ledger_mode="mock"))
    assert ledger.mode == "MOCK"

    # auto: no connection profile in tmp_path -> mock.
    ledger = await connect_ledger(make_settings(ledger_mode="auto"))
    assert ledger.mode == "MOCK"

    with pytest.raises(LedgerError, match="connection profile not found"):
        await connect_ledger(make_settings(ledger_mode="fabric"))


@pytest.mark.asyncio
async def test_connect_ledger_uses_reachable_gateway(make_settings, tmp_path: Path) -> None:
    settings = _fabric_ready(tmp_path, make_settings, ledger_mode="fabric")
    transport = httpx.MockTransport(lambda _: httpx.Response(200, json={"status": "ok"}))

    ledger = await connect_ledger(settings, transport=transport)
    try:
        assert ledger.mode == "FABRIC"
    finally:
        await ledger.close()


@pytest.mark.asyncio
async def test_auto_mode_falls_back_when_gateway_is_down(make_settings, tmp_path: Path) -> None:
    settings = _fabric_ready(tmp_path, make_settings, ledger_mode="auto")

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    ledger = await connect_ledger(settings, transport=httpx.MockTransport(refuse))
    assert ledger.mode == "MOCK"

    settings = _fabric_ready(tmp_path, make_settings, ledger_mode="fabric")
    with pytest.raises(LedgerError, match="unreachable"):
        await connect_ledger(settings, transport=httpx.MockTransport(refuse))


def test_wallet_files(tmp_path: Path) -> None:
    wallet = FileSystemWallet(tmp_path / "wallet")
    assert wallet.list() == []
    assert wallet.get("admin") is None

    path = wallet.put("admin", IDENTITY)
    assert path.name == "admin.id"
    stored = json.loads(path.read_text())
    assert stored["type"] == "X.509"
    assert stored["mspId"] == "Org1MSP"
    assert stored["credentials"] == {"certificate": "-----CERT-----", "privateKey": "-----KEY-----"}
    assert wallet.get("admin") == IDENTITY
    assert wallet.list() == ["admin"]


def test_load_admin_from_msp(tmp_path: Path) -> None:
    identity = load_admin_from_msp(_write_msp(tmp_path), msp_id="Org1MSP")
    assert identity == IDENTITY

    empty = tmp_path / "empty"
    (empty / "signcerts").mkdir(parents=True)
    with pytest.raises(FileNotFoundError):
        load_admin_from_msp(empty, msp_id="Org1MSP")


def test_enroll_admin_is_idempotent(make_settings, tmp_path: Path) -> None:
    settings = make_settings()
    msp = _write_msp(tmp_path)

    assert enroll_admin(settings, msp_dir=str(msp)) is True
    assert enroll_admin(settings, msp_dir=str(msp)) is False
    assert FileSystemWallet(settings.fabric_wallet_path).get("admin") == IDENTITY


def test_enroll_cli_reports_missing_msp(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LANDCHAIN_FABRIC_WALLET_PATH", str(tmp_path / "wallet"))
    get_settings.cache_clear()
    try:
        assert main(["--msp-dir", str(tmp_path / "missing")]) == 1
        assert main(["--msp-dir", str(_write_msp(tmp_path))]) == 0
    finally:
        get_settings.cache_clear()
    assert (tmp_path / "wallet" / "admin.id").is_file()


@pytest.mark.asyncio
async def test_mock_ledger_keeps_bounded_history() -> None:
    ledger = MockLedger(history=3)
    for n in range(5):
        await ledger.submit(PROPERTY_CONTRACT, "IncrementPropertyViews", f"PROP_{n}")

    assert [i.args for i in ledger.invocations] == [["PROP_2"], ["PROP_3"], ["PROP_4"]]
    assert len(ledger.calls("IncrementPropertyViews")) == 3


@pytest.mark.asyncio
async def test_connect_ledger_sizes_mock_history(make_settings) -> None:
    ledger = await connect_ledger(make_settings(ledger_mode="mock", mock_ledger_history=2))

    assert isinstance(ledger, MockLedger)
    assert ledger.invocations.maxlen == 2

"""
landchain_registry.ledger.wallet

File-system wallet compatible with the layout `fabric-network` writes.

Responsibilities:
- Read and write X.509 identities as `<wallet>/<label>.id` JSON files.
- Import the org admin certificate/key from a crypto-config tree (enrollment).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class X509Identity:
    msp_id: str
    certificate: str
    private_key: str

    def to_json(self) -> dict[str, Any]:
        return {
            "credentials": {"certificate": self.certificate, "privateKey": self.private_key},
            "mspId": self.msp_id,
            "type": "X.509",
            "version": 1,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> X509Identity:
        creds = data.get("credentials") or {}
        return cls(
            msp_id=str(data.get("mspId", "")),
            certificate=str(creds.get("certificate", "")),
            private_key=str(creds.get("privateKey", "")),
        )


class FileSystemWallet:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _file(self, label: str) -> Path:
        return self._path / f"{label}.id"

    def get(self, label: str) -> X509Identity | None:
        f = self._file(label)
        if not f.is_file():
            return None
        return X509Identity.from_json(json.loads(f.read_text(encoding="utf-8")))

    def put(self, label: str, identity: X509Identity) -> Path:
        self._path.mkdir(parents=True, exist_ok=True)
        f = self._file(label)
        f.write_text(json.dumps(identity.to_json(), indent=2), encoding="utf-8")
        return f

    def list(self) -> list[str]:
        if not self._path.is_dir():
            return []
        return sorted(p.stem for p in self._path.glob("*.id"))


def load_admin_from_msp(msp_dir: str | Path, *, msp_id: str) -> X509Identity:
    """
    Build an identity from an MSP folder (`signcerts/*.pem` + first file in `keystore/`).
    """

    msp = Path(msp_dir)
    certs = sorted((msp / "signcerts").glob("*.pem"))
    if not certs:
        raise FileNotFoundError(f"no certificate found under {msp / 'signcerts'}")
    keys = sorted(p for p in (msp / "keystore").iterdir() if p.is_file())
    if not keys:
        raise FileNotFoundError(f"no private key found under {msp / 'keystore'}")
    return X509Identity(
        msp_id=msp_id,
        certificate=certs[0].read_text(encoding="utf-8"),
        private_key=keys[0].read_text(encoding="utf-8"),
    )

"""
landchain_registry.ledger.enroll

Import the Fabric org admin identity into the service wallet.

Usage: `python -m landchain_registry.ledger.enroll --msp-dir <path-to-admin-msp>`
"""

from __future__ import annotations

import argparse
import sys

from landchain_registry.ledger.wallet import FileSystemWallet, load_admin_from_msp
from landchain_registry.observability.logging import configure_logging, get_logger
from landchain_registry.settings import Settings, get_settings

log = get_logger(__name__)

DEFAULT_MSP_DIR = (
    "../crypto-config/peerOrganizations/org1.landregistry.com/users/"
    "Admin@org1.landregistry.com/msp"
)


def enroll_admin(settings: Settings, *, msp_dir: str) -> bool:
    """Returns False when the identity already existed."""

    wallet = FileSystemWallet(settings.fabric_wallet_path)
    if wallet.get(settings.fabric_identity) is not None:
        log.info("identity_exists", label=settings.fabric_identity)
        return False

    identity = load_admin_from_msp(msp_dir, msp_id=settings.fabric_msp_id)
    path = wallet.put(settings.fabric_identity, identity)
    log.info("identity_imported", label=settings.fabric_identity, wallet=str(path.parent))
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import the Fabric admin identity into the wallet")
    parser.add_argument("--msp-dir", default=DEFAULT_MSP_DIR, help="Admin MSP directory")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(service_name=settings.service_name, level=settings.log_level)
    try:
        enroll_admin(settings, msp_dir=args.msp_dir)
    except FileNotFoundError as e:
        log.error("enroll_failed", error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

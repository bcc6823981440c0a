"""
landchain_registry.services.ids

Identifier helpers for server-generated record ids.
"""

from __future__ import annotations

import secrets
import string
import time

_BASE36 = string.digits + string.ascii_lowercase


def _suffix(n: int = 9) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(n))


def new_id(prefix: str) -> str:
    # `<PREFIX>_<epoch-ms>_<9 base36 chars>`, same shape the frontend generates.
    return f"{prefix}_{int(time.time() * 1000)}_{_suffix()}"


def new_transaction_id() -> str:
    return new_id("TXN")

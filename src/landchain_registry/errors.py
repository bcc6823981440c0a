"""
landchain_registry.errors

Domain exceptions raised by services and clients.

Responsibilities:
- Give every failure a type the API layer can map to an HTTP status.
- Keep HTTP concerns out of services (the mapping lives in `api.errors`).
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for all expected registry failures."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailedError(RegistryError):
    status_code = 400


class NotFoundError(RegistryError):
    status_code = 404

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} {key} not found")
        self.kind = kind
        self.key = key


class ConflictError(RegistryError):
    status_code = 409


class InvalidTransitionError(ConflictError):
    def __init__(self, kind: str, key: str, current: str, action: str) -> None:
        super().__init__(f"cannot {action} {kind.lower()} {key} in status {current}")
        self.current = current
        self.action = action


class AuthenticationError(RegistryError):
    status_code = 401


class LedgerError(RegistryError):
    # The ledger rejected or failed a call; local state is left untouched.
    status_code = 502


class UpstreamError(RegistryError):
    """An external HTTP dependency failed; carries the status to surface."""

    def __init__(self, message: str, *, status_code: int = 502) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotConfiguredError(RegistryError):
    status_code = 503


# --- Module Notes -----------------------------------------------------------
# Anything that is not a RegistryError is treated as a bug and surfaces as HTTP 500.

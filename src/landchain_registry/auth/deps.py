"""
landchain_registry.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Convert a bearer token into a typed `Principal` (required or optional).
"""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from landchain_registry.api.deps import settings_dep
from landchain_registry.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from landchain_registry.auth.models import Principal
from landchain_registry.errors import AuthenticationError, ValidationFailedError
from landchain_registry.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def _principal_from_token(token: str, settings: Settings) -> Principal:
    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=token)
    except JwtValidationError as e:
        raise AuthenticationError(f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    roles_raw = payload.get("roles", [])
    if not subject:
        raise AuthenticationError("Invalid token subject")
    if not isinstance(roles_raw, list):
        raise AuthenticationError("Invalid token roles")
    return Principal(subject=subject, roles=frozenset(str(r) for r in roles_raw))


def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> Principal:
    if creds is None or not creds.credentials:
        raise AuthenticationError("Missing bearer token")
    return _principal_from_token(creds.credentials, settings)


def optional_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> Principal | None:
    # Registry endpoints stay open; a token, when sent, still has to be valid.
    if creds is None or not creds.credentials:
        return None
    return _principal_from_token(creds.credentials, settings)


def acting_user_id(
    explicit: str | None, principal: Principal | None, *, field: str = "adminId"
) -> str:
    # An id sent in the body wins; otherwise the caller's token subject.
    if explicit:
        return explicit
    if principal is not None:
        return principal.subject
    raise ValidationFailedError(f"{field} is required")

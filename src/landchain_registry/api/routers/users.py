"""
landchain_registry.api.routers.users

User registration, login and KYC endpoints.

Responsibilities:
- Register users and log them in (login returns a bearer token).
- Attach and verify KYC documents; toggle the verification flag.
- Resolve the caller of `/api/users/me` from the token.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import Field

from landchain_registry.api.deps import settings_dep, user_service
from landchain_registry.auth.deps import acting_user_id, get_principal, optional_principal
from landchain_registry.auth.jwt import JwtConfig, issue_token
from landchain_registry.auth.models import Principal
from landchain_registry.db.models import UserRole
from landchain_registry.schemas import CamelModel, UserOut, envelope, to_wire, to_wire_list
from landchain_registry.services.users import UserService
from landchain_registry.settings import Settings

router = APIRouter(prefix="/api/users", tags=["users"])


class UserRegisterRequest(CamelModel):
    user_id: str | None = Field(default=None, max_length=128)
    name: str = Field(min_length=1, max_length=256)
    email: str = Field(min_length=3, max_length=320)
    phone: str = ""
    aadhar: str = ""
    pan: str = ""
    address: str = ""
    role: UserRole = UserRole.buyer
    wallet_address: str = ""
    password: str | None = Field(default=None, min_length=1)
    password_hash: str | None = None


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class DocumentRequest(CamelModel):
    document_id: str | None = Field(default=None, max_length=128)
    document_type: str = Field(min_length=1, max_length=64)
    document_hash: str = Field(min_length=1)


class AdminActionRequest(CamelModel):
    admin_id: str | None = None


class VerificationRequest(CamelModel):
    is_verified: bool


@router.post("/register")
async def register_user(
    body: UserRegisterRequest, svc: UserService = Depends(user_service)
) -> dict[str, Any]:
    user = await svc.register(**body.model_dump())
    return envelope(to_wire(UserOut, user), userId=user.user_id)


@router.post("/login")
async def login(
    body: LoginRequest,
    svc: UserService = Depends(user_service),
    settings: Settings = Depends(settings_dep),
) -> dict[str, Any]:
    user = await svc.login(email=body.email, password=body.password)
    token = issue_token(
        cfg=JwtConfig.from_settings(settings),
        subject=user.user_id,
        roles=[user.role.value],
        ttl=timedelta(minutes=settings.jwt_ttl_minutes),
    )
    return envelope(to_wire(UserOut, user), accessToken=token, tokenType="bearer")


@router.get("")
async def list_users(
    role: UserRole | None = None, svc: UserService = Depends(user_service)
) -> dict[str, Any]:
    return envelope(to_wire_list(UserOut, await svc.list(role=role)))


@router.get("/me")
async def current_user(
    principal: Principal = Depends(get_principal), svc: UserService = Depends(user_service)
) -> dict[str, Any]:
    return envelope(to_wire(UserOut, await svc.get(principal.subject)))


@router.get("/{user_id}")
async def get_user(user_id: str, svc: UserService = Depends(user_service)) -> dict[str, Any]:
    return envelope(to_wire(UserOut, await svc.get(user_id)))


@router.post("/{user_id}/documents")
async def add_document(
    user_id: str, body: DocumentRequest, svc: UserService = Depends(user_service)
) -> dict[str, Any]:
    user = await svc.add_document(
        user_id,
        document_type=body.document_type,
        document_hash=body.document_hash,
        document_id=body.document_id,
    )
    return envelope(to_wire(UserOut, user))


@router.post("/{user_id}/documents/{document_id}/verify")
async def verify_document(
    user_id: str,
    document_id: str,
    body: AdminActionRequest | None = None,
    principal: Principal | None = Depends(optional_principal),
    svc: UserService = Depends(user_service),
) -> dict[str, Any]:
    admin_id = acting_user_id(body.admin_id if body else None, principal)
    user = await svc.verify_document(user_id, document_id, admin_id=admin_id)
    return envelope(to_wire(UserOut, user))


@router.put("/{user_id}/verification")
async def set_verification(
    user_id: str, body: VerificationRequest, svc: UserService = Depends(user_service)
) -> dict[str, Any]:
    user = await svc.set_verification(user_id, is_verified=body.is_verified)
    return envelope(to_wire(UserOut, user))

"""
landchain_registry.services.users

KYC and login service.

Responsibilities:
- Register users (ledger `RegisterUser`) and authenticate them by email/password.
- Manage KYC documents and the user verification flag.
- Seed the demo accounts used by the login page.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from landchain_registry.db.models import User, UserRole, utcnow
from landchain_registry.db.repositories.users import UserRepo
from landchain_registry.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationFailedError,
)
from landchain_registry.ledger.base import USER_CONTRACT, Ledger
from landchain_registry.observability.logging import get_logger
from landchain_registry.services.ids import new_id

log = get_logger(__name__)


def encode_password(password: str) -> str:
    # The frontend stores base64(password) as `passwordHash`; keep the same encoding.
    return base64.b64encode(password.encode("utf-8")).decode("ascii")


def _is_base64(value: str) -> bool:
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


@dataclass(frozen=True, slots=True)
class DemoUser:
    user_id: str
    name: str
    email: str
    password: str
    role: UserRole
    phone: str
    address: str


DEMO_USERS: tuple[DemoUser, ...] = (
    DemoUser(
        user_id="ADMIN_001",
        name="Registry Admin",
        email="admin@landregistry.gov",
        password="admin123",
        role=UserRole.admin,
        phone="9000000001",
        address="Land Registry Office, Tirupati",
    ),
    DemoUser(
        user_id="SELLER_001",
        name="Ramesh Kumar",
        email="ramesh@example.com",
        password="seller123",
        role=UserRole.seller,
        phone="9000000002",
        address="Tirupati, Andhra Pradesh",
    ),
    DemoUser(
        user_id="BUYER_001",
        name="Priya Sharma",
        email="priya@example.com",
        password="buyer123",
        role=UserRole.buyer,
        phone="9000000003",
        address="Chittoor, Andhra Pradesh",
    ),
)


class UserService:
    def __init__(self, *, session: AsyncSession, ledger: Ledger) -> None:
        self._session = session
        self._ledger = ledger
        self._users = UserRepo(session)

    async def register(
        self,
        *,
        name: str,
        email: str,
        role: UserRole,
        user_id: str | None = None,
        phone: str = "",
        aadhar: str = "",
        pan: str = "",
        address: str = "",
        wallet_address: str = "",
        password: str | None = None,
        password_hash: str | None = None,
    ) -> User:
        if password is not None:
            password_hash = encode_password(password)
        if not password_hash:
            raise ValidationFailedError("password or passwordHash is required")
        if not _is_base64(password_hash):
            raise ValidationFailedError("passwordHash must be base64 encoded")

        user_id = user_id or new_id("USER")
        if await self._users.get(user_id) is not None:
            raise ConflictError(f"user {user_id} already exists")
        if await self._users.get_by_email(email) is not None:
            raise ConflictError(f"email {email} is already registered")

        await self._ledger.submit(
            USER_CONTRACT,
            "RegisterUser",
            user_id,
            name,
            email,
            phone,
            aadhar,
            pan,
            address,
            role.value,
            wallet_address,
            password_hash,
        )
        user = await self._users.create(
            user_id=user_id,
            role=role,
            name=name,
            email=email,
            phone=phone,
            aadhar=aadhar,
            pan=pan,
            address=address,
            wallet_address=wallet_address,
            password_hash=password_hash,
        )
        await self._session.commit()
        log.info("user_registered", user_id=user_id, role=role.value)
        return user

    async def login(self, *, email: str, password: str) -> User:
        user = await self._users.get_by_email(email)
        if user is None or user.password_hash != encode_password(password):
            log.info("login_failed", email=email)
            raise AuthenticationError("Invalid email or password")

        await self._ledger.submit(USER_CONTRACT, "UpdateLastLogin", user.user_id)
        user.last_login = utcnow()
        await self._session.commit()
        log.info("login_succeeded", user_id=user.user_id)
        return user

    async def get(self, user_id: str) -> User:
        user = await self._users.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def list(self, *, role: UserRole | None = None) -> list[User]:
        return await self._users.list(role=role)

    async def add_document(
        self,
        user_id: str,
        *,
        document_type: str,
        document_hash: str,
        document_id: str | None = None,
    ) -> User:
        user = await self._users.get(user_id, for_update=True)
        if user is None:
            raise NotFoundError("User", user_id)
        document_id = document_id or new_id("DOC")
        if any(d.get("document_id") == document_id for d in user.documents):
            raise ConflictError(f"document {document_id} already exists for user {user_id}")

        await self._ledger.submit(
            USER_CONTRACT, "AddDocument", user_id, document_id, document_type, document_hash
        )
        doc: dict[str, Any] = {
            "document_id": document_id,
            "document_type": document_type,
            "document_hash": document_hash,
            "uploaded_at": utcnow().isoformat(),
            "verified_by": "",
            "is_verified": False,
        }
        # Reassign so the JSON column is marked dirty.
        user.documents = [*user.documents, doc]
        await self._session.commit()
        log.info("document_added", user_id=user_id, document_id=document_id)
        return user

    async def verify_document(self, user_id: str, document_id: str, *, admin_id: str) -> User:
        user = await self._users.get(user_id, for_update=True)
        if user is None:
            raise NotFoundError("User", user_id)
        if not any(d.get("document_id") == document_id for d in user.documents):
            raise NotFoundError("Document", document_id)

        await self._ledger.submit(USER_CONTRACT, "VerifyDocument", user_id, document_id, admin_id)
        user.documents = [
            {**d, "is_verified": True, "verified_by": admin_id}
            if d.get("document_id") == document_id
            else d
            for d in user.documents
        ]
        user.is_verified = True
        await self._session.commit()
        log.info("document_verified", user_id=user_id, document_id=document_id, admin_id=admin_id)
        return user

    async def set_verification(self, user_id: str, *, is_verified: bool) -> User:
        user = await self._users.get(user_id, for_update=True)
        if user is None:
            raise NotFoundError("User", user_id)

        await self._ledger.submit(USER_CONTRACT, "UpdateUserVerification", user_id, is_verified)
        user.is_verified = is_verified
        await self._session.commit()
        log.info("user_verification_set", user_id=user_id, is_verified=is_verified)
        return user

    async def seed_demo_users(self) -> int:
        created = 0
        for demo in DEMO_USERS:
            if await self._users.get_by_email(demo.email) is not None:
                continue
            await self.register(
                user_id=demo.user_id,
                name=demo.name,
                email=demo.email,
                role=demo.role,
                phone=demo.phone,
                address=demo.address,
                password=demo.password,
            )
            created += 1
        return created


# --- Module Notes -----------------------------------------------------------
# `passwordHash` is an encoding, not a hash; it is compared verbatim on login so
# existing frontend-created accounts keep working.

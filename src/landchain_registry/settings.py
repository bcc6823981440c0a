"""
landchain_registry.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the API, persistence, ledger and external clients.
- Hide secrets from repr/logging (JWT secret, AI gateway key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LANDCHAIN_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "landchain-registry"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3001
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Auth (login tokens)
    jwt_alg: str = "HS256"
    jwt_issuer: str = "landchain-registry"
    jwt_audience: str = "landchain-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    jwt_ttl_minutes: int = 24 * 60

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./landchain.db"
    seed_demo_users: bool = True

    # Ledger: "auto" tries Fabric and falls back to the mock ledger.
    ledger_mode: Literal["auto", "fabric", "mock"] = "auto"
    fabric_gateway_url: str = "http://localhost:7080"
    fabric_channel: str = "landregistry"
    fabric_connection_profile: str = "./connection-profile.json"
    fabric_wallet_path: str = "./wallet"
    fabric_identity: str = "admin"
    fabric_msp_id: str = "Org1MSP"
    fabric_timeout_seconds: float = 10.0
    # Invocations the mock ledger keeps for inspection; older ones are dropped.
    mock_ledger_history: int = Field(default=1000, ge=1)

    # AI price prediction (OpenAI-compatible chat completions endpoint)
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    ai_api_key: str | None = Field(default=None, repr=False)
    ai_model: str = "google/gemini-2.5-flash"
    ai_timeout_seconds: float = 30.0

    # Sepolia RPC endpoint (web3 HTTP provider) for receipt lookups; disabled when unset.
    sepolia_rpc_url: str | None = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Every other layer reads configuration through `Settings`; nothing reads os.environ directly
# except the Alembic environment.

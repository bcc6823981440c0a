"""
landchain_registry.clients.ai_gateway

Client for an OpenAI-compatible chat-completions gateway.

Responsibilities:
- Attach the bearer API key and the configured model.
- Map gateway throttling/billing responses to errors the API can surface as-is.
"""

from __future__ import annotations

from typing import Any

import httpx

from landchain_registry.errors import NotConfiguredError, UpstreamError
from landchain_registry.observability.logging import get_logger
from landchain_registry.settings import Settings

log = get_logger(__name__)


class AiGatewayClient:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    async def chat(self, *, system: str, user: str, temperature: float = 0.7) -> str:
        if not self._settings.ai_api_key:
            raise NotConfiguredError("AI gateway API key is not configured")

        try:
            r = await self._http.post(
                self._settings.ai_gateway_url,
                headers={"Authorization": f"Bearer {self._settings.ai_api_key}"},
                json={
                    "model": self._settings.ai_model,
                    "messages": [
                        {"role": "system", "content": system},
                        {"role": "user", "content": user},
                    ],
                    "temperature": temperature,
                },
                timeout=self._settings.ai_timeout_seconds,
            )
        except httpx.HTTPError as e:
            raise UpstreamError(f"AI gateway unreachable: {e}") from e

        if r.status_code == 429:
            raise UpstreamError("Rate limit exceeded. Please try again later.", status_code=429)
        if r.status_code == 402:
            raise UpstreamError(
                "Payment required. Please add credits to your workspace.", status_code=402
            )
        if r.status_code >= 400:
            log.error("ai_gateway_error", status=r.status_code, body=r.text[:500])
            raise UpstreamError("AI gateway error")

        try:
            body: dict[str, Any] = r.json()
            return str(body["choices"][0]["message"]["content"])
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError("AI gateway returned an unexpected response") from e

# =============================================================================
# codebeat/llms/grok_client.py — xAI Grok client (OpenAI-compatible API)
# =============================================================================
# Uses XAI_API_KEY (or GROK_API_KEY). POST {GROK_BASE_URL}/chat/completions.
# Translations come back as the bare code string.
# =============================================================================

from typing import Any, Callable

import httpx

from codebeat.core.config import Settings
from codebeat.core.errors import ProviderAuthError, ProviderUpstreamError
from codebeat.core.security import require_grok_key
from codebeat.llms.base import Message, ProviderClient


class GrokClient(ProviderClient):
    key = "grok"

    def __init__(
        self,
        settings_source: Callable[[], Settings] = Settings.from_env,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(settings_source)
        self._client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.settings().request_timeout)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def complete(
        self,
        messages: list[Message],
        *,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        json_output: bool = False,
    ) -> str:
        settings = self.settings()
        key = require_grok_key(settings)
        payload: dict[str, Any] = {
            "model": settings.grok_model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens:
            payload["max_tokens"] = max_tokens
        if json_output:
            payload["response_format"] = {"type": "json_object"}
        client = await self._get_client()
        try:
            r = await client.post(
                f"{settings.grok_base_url.rstrip('/')}/chat/completions",
                headers={"Authorization": f"Bearer {key}"},
                json=payload,
            )
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code in (401, 403):
                raise ProviderAuthError(self.key, "XAI_API_KEY invalid or not allowed") from e
            raise ProviderUpstreamError(
                self.key, f"Grok API error {e.response.status_code}: {(e.response.text or '')[:500]}"
            ) from e
        except httpx.RequestError as e:
            raise ProviderUpstreamError(self.key, f"Grok API unreachable: {e!s}") from e
        try:
            data = r.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderUpstreamError(self.key, "Grok API returned a malformed response") from e
        if not isinstance(content, str) or not content.strip():
            raise ProviderUpstreamError(self.key, "Grok API returned no text")
        return content

# =============================================================================
# codebeat/llms/gemini_client.py — Google Gemini API client
# =============================================================================
# Uses GEMINI_API_KEY. Suitable models: gemini-1.5-flash, gemini-1.5-pro,
# gemini-2.0-flash. Default when GEMINI_MODEL is not Gemini-style:
# gemini-1.5-flash. System messages go to systemInstruction, assistant turns
# are sent with role "model". Translations use structured output and come back
# as {"translatedCode", "explanation"}.
# =============================================================================

from typing import Any, Callable

import httpx

from codebeat.core.config import Settings
from codebeat.core.errors import ProviderAuthError, ProviderUpstreamError
from codebeat.core.security import require_gemini_key
from codebeat.llms import prompts
from codebeat.llms.base import Message, ProviderClient
from codebeat.llms.parsing import parse_json_payload, strip_code_fences

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"
GEMINI_DEFAULT_MODEL = "gemini-1.5-flash"
MAX_OUTPUT_TOKENS = 8192


def _resolve_gemini_model(model: str) -> str:
    if not model or not model.strip():
        return GEMINI_DEFAULT_MODEL
    m = model.strip().lower()
    if m.startswith("gemini-"):
        return model.strip()
    return GEMINI_DEFAULT_MODEL


def _to_gemini_contents(messages: list[Message]) -> tuple[str, list[dict[str, Any]]]:
    system_parts = []
    contents = []
    for msg in messages:
        role = msg.get("role", "user")
        text = msg.get("content", "")
        if role == "system":
            system_parts.append(text)
            continue
        contents.append({
            "role": "model" if role == "assistant" else "user",
            "parts": [{"text": text}],
        })
    return "\n\n".join(system_parts), contents


class GeminiClient(ProviderClient):
    key = "gemini"

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
        key = require_gemini_key(settings)
        model = _resolve_gemini_model(settings.gemini_model)
        system, contents = _to_gemini_contents(messages)
        generation_config: dict[str, Any] = {
            "temperature": min(2.0, max(0.0, temperature)),
            "maxOutputTokens": max_tokens or MAX_OUTPUT_TOKENS,
        }
        if json_output:
            generation_config["responseMimeType"] = "application/json"
        payload: dict[str, Any] = {"contents": contents, "generationConfig": generation_config}
        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}
        client = await self._get_client()
        try:
            r = await client.post(f"{GEMINI_API_BASE}/{model}:generateContent", params={"key": key}, json=payload)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code in (401, 403):
                raise ProviderAuthError(self.key, "GEMINI_API_KEY invalid or not allowed") from e
            raise ProviderUpstreamError(
                self.key, f"Gemini API error {e.response.status_code}: {(e.response.text or '')[:500]}"
            ) from e
        except httpx.RequestError as e:
            raise ProviderUpstreamError(self.key, f"Gemini API unreachable: {e!s}") from e
        try:
            data = r.json()
            candidates = data.get("candidates") or []
            parts = ((candidates[0].get("content") or {}).get("parts") or []) if candidates else []
            text = "".join(p.get("text") or "" for p in parts)
        except (ValueError, AttributeError, TypeError) as e:
            raise ProviderUpstreamError(self.key, "Gemini API returned a malformed response") from e
        if not text.strip():
            reason = (data.get("promptFeedback") or {}).get("blockReason") if isinstance(data, dict) else None
            detail = f" (blocked: {reason})" if reason else ""
            raise ProviderUpstreamError(self.key, f"Gemini API returned no text{detail}")
        return text

    async def translate_code(self, source_code: str, source_language: str, target_language: str) -> dict:
        system, user = prompts.translate_prompt(source_code, source_language, target_language, structured=True)
        text = await self._ask(system, user, temperature=0.2, json_output=True)
        data = parse_json_payload(text, self.key)
        if isinstance(data.get("translatedCode"), str):
            data["translatedCode"] = strip_code_fences(data["translatedCode"])
        return data

# =============================================================================
# codebeat/services/generation_service.py — Capability facade
# =============================================================================
# validate -> resolve provider -> one client call -> normalize -> return.
# Validation runs before resolution, so bad input never reaches a provider.
# Errors from clients propagate unchanged; nothing here retries or switches
# provider after a failure. Persistence belongs to the HTTP handlers.
# =============================================================================

import time
from typing import Any, Awaitable, Callable, TypeVar

import pydantic

from codebeat.core.errors import CodeBeatError, ProviderUpstreamError, ValidationError
from codebeat.llms.router import ProviderRegistry
from codebeat.schemas.arguments import (
    DEFAULT_BEAT_DURATION,
    AnalyzeArgs,
    AssistArgs,
    BeatArgs,
    ChatArgs,
    CodeMusicArgs,
    LyricsArgs,
    TranslateArgs,
)
from codebeat.schemas.response import (
    AssistResult,
    BeatResult,
    ChatResult,
    CodeMusicResult,
    GenerationResult,
    LyricsAnalysis,
    LyricsResult,
    ProviderDescriptor,
    TranslationResult,
)
from codebeat.utils.logger import logger

A = TypeVar("A", bound=pydantic.BaseModel)
R = TypeVar("R", bound=GenerationResult)


def _field_path(loc: tuple) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _validate(model: type[A], **values: Any) -> A:
    """Validate capability arguments, keyed by their wire names.

    The first pydantic error becomes a ValidationError naming the field.
    """
    try:
        return model.model_validate(values)
    except pydantic.ValidationError as e:
        err = e.errors(include_url=False)[0]
        if err["type"] == "value_error":
            constraint = str(err["ctx"]["error"])
        else:
            constraint = err["msg"]
        raise ValidationError(_field_path(err["loc"]), constraint) from None


def _normalize(raw: Any, model: type[R], primary: str, provider: str) -> R:
    """Shape a provider's raw return value into the canonical result.

    A bare string becomes the primary field. A mapping is validated into the
    result model, accepting either camelCase or snake_case keys.
    """
    if isinstance(raw, model):
        result = raw.model_copy()
    elif isinstance(raw, str):
        result = model.model_validate({primary: raw})
    elif isinstance(raw, dict):
        alias = model.model_fields[primary].alias or primary
        if raw.get(primary) is None and raw.get(alias) is None:
            raise ProviderUpstreamError(provider, f"{provider} response is missing {alias!r}")
        try:
            result = model.model_validate(raw)
        except pydantic.ValidationError as e:
            raise ProviderUpstreamError(provider, f"{provider} response has an unexpected shape") from e
    else:
        raise ProviderUpstreamError(provider, f"{provider} returned {type(raw).__name__}, expected text or object")
    result.provider = provider
    result.id = None
    return result


async def _invoke(
    registry: ProviderRegistry,
    provider: Any,
    capability: str,
    call: Callable[[Any], Awaitable[Any]],
) -> tuple[str, Any]:
    key = registry.resolve_key(provider)
    client = registry.resolve(key)
    start = time.perf_counter()
    try:
        raw = await call(client)
    except CodeBeatError as e:
        logger.warning(
            "provider_failed",
            extra={"provider": key, "capability": capability, "error_kind": e.kind, "error": e.message},
        )
        raise
    latency_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "provider_call",
        extra={"provider": key, "capability": capability, "latency_ms": round(latency_ms, 2)},
    )
    return key, raw


def list_providers(registry: ProviderRegistry) -> list[ProviderDescriptor]:
    return registry.list_providers()


async def translate(
    registry: ProviderRegistry,
    source_code: str,
    source_language: str,
    target_language: str,
    provider: Any = None,
) -> TranslationResult:
    args = _validate(
        TranslateArgs,
        sourceCode=source_code,
        sourceLanguage=source_language,
        targetLanguage=target_language,
    )
    key, raw = await _invoke(
        registry, provider, "translate",
        lambda c: c.translate_code(args.source_code, args.source_language, args.target_language),
    )
    return _normalize(raw, TranslationResult, "translated_code", key)


async def generate_lyrics(
    registry: ProviderRegistry,
    prompt: str,
    mood: str | None = None,
    genre: str | None = None,
    provider: Any = None,
) -> LyricsResult:
    args = _validate(LyricsArgs, prompt=prompt, mood=mood, genre=genre)
    key, raw = await _invoke(
        registry, provider, "lyrics",
        lambda c: c.generate_lyrics(args.prompt, mood=args.mood, genre=args.genre),
    )
    return _normalize(raw, LyricsResult, "lyrics", key)


async def generate_beat(
    registry: ProviderRegistry,
    genre: str,
    bpm: int | float,
    duration: int | float | None = None,
    provider: Any = None,
) -> BeatResult:
    if duration is None:
        duration = DEFAULT_BEAT_DURATION
    args = _validate(BeatArgs, genre=genre, bpm=bpm, duration=duration)
    key, raw = await _invoke(
        registry, provider, "beat",
        lambda c: c.generate_beat_pattern(args.genre, args.bpm, args.duration),
    )
    return _normalize(raw, BeatResult, "pattern", key)


async def code_to_music(
    registry: ProviderRegistry,
    code: str,
    language: str,
    provider: Any = None,
) -> CodeMusicResult:
    args = _validate(CodeMusicArgs, code=code, language=language)
    key, raw = await _invoke(
        registry, provider, "codebeat",
        lambda c: c.code_to_music(args.code, args.language),
    )
    return _normalize(raw, CodeMusicResult, "music", key)


async def assist(
    registry: ProviderRegistry,
    question: str,
    context: str | None = None,
    provider: Any = None,
) -> AssistResult:
    args = _validate(AssistArgs, question=question, context=context)
    key, raw = await _invoke(
        registry, provider, "assist",
        lambda c: c.get_assistance(args.question, args.context),
    )
    return _normalize(raw, AssistResult, "answer", key)


async def analyze_lyrics(registry: ProviderRegistry, lyrics: str, provider: Any = None) -> LyricsAnalysis:
    args = _validate(AnalyzeArgs, lyrics=lyrics)
    key, raw = await _invoke(registry, provider, "analyze", lambda c: c.analyze_lyrics(args.lyrics))
    return _normalize(raw, LyricsAnalysis, "analysis", key)


async def chat(
    registry: ProviderRegistry,
    messages: list[dict[str, str]],
    temperature: float = 0.7,
    max_tokens: int | None = None,
    provider: Any = None,
) -> ChatResult:
    args = _validate(ChatArgs, messages=messages, temperature=temperature, maxTokens=max_tokens)
    cleaned = [m.model_dump() for m in args.messages]
    key, raw = await _invoke(
        registry, provider, "chat",
        lambda c: c.chat(cleaned, temperature=args.temperature, max_tokens=args.max_tokens),
    )
    return _normalize(raw, ChatResult, "message", key)

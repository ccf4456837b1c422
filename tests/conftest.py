"""Shared fixtures: fake provider clients, an injectable registry, a temp database."""

from typing import Any

import pytest

from codebeat.core.config import Settings, get_settings
from codebeat.core.errors import ProviderAuthError
from codebeat.llms.base import ProviderClient
from codebeat.llms.router import ProviderRegistry


class FakeClient(ProviderClient):
    """Provider client returning canned payloads and counting calls."""

    def __init__(self, key: str, responses: dict[str, Any] | None = None, settings_source=None) -> None:
        super().__init__(settings_source or (lambda: Settings()))
        self.key = key
        self.responses = responses or {}
        self.calls: list[tuple[str, tuple, dict]] = []
        self.credential_field: str | None = None

    def _respond(self, capability: str, *args, **kwargs) -> Any:
        self.calls.append((capability, args, kwargs))
        if self.credential_field and not getattr(self.settings(), self.credential_field):
            raise ProviderAuthError(self.key, f"{self.key} credential is not set")
        value = self.responses.get(capability)
        if isinstance(value, Exception):
            raise value
        return value

    async def complete(self, messages, *, temperature=0.7, max_tokens=None, json_output=False) -> str:
        return self._respond("complete", messages)

    async def translate_code(self, source_code, source_language, target_language):
        return self._respond("translate", source_code, source_language, target_language)

    async def generate_lyrics(self, prompt, mood=None, genre=None):
        return self._respond("lyrics", prompt, mood=mood, genre=genre)

    async def generate_beat_pattern(self, genre, bpm, duration):
        return self._respond("beat", genre, bpm, duration)

    async def code_to_music(self, code, language):
        return self._respond("codebeat", code, language)

    async def get_assistance(self, question, context=None):
        return self._respond("assist", question, context)

    async def analyze_lyrics(self, lyrics):
        return self._respond("analyze", lyrics)

    async def chat(self, messages, temperature=0.7, max_tokens=None):
        return self._respond("chat", messages, temperature=temperature, max_tokens=max_tokens)


DEFAULT_RESPONSES = {
    "translate": "console.log('x')",
    "lyrics": {"title": "Night Drive", "lyrics": "City lights...", "structure": ["verse", "chorus"]},
    "beat": {"pattern": {"kick": [1, 0, 0, 0] * 4, "snare": [0, 0, 1, 0] * 4}, "description": "boom bap"},
    "codebeat": {"music": "C4 E4 G4", "mapping": "loops become arpeggios", "tempo": 120, "key": "C major"},
    "assist": "Use a list comprehension.",
    "analyze": {"analysis": "A song about leaving home.", "themes": ["home", "change"], "mood": "wistful"},
    "chat": "Hello!",
}


@pytest.fixture
def settings() -> Settings:
    return Settings(xai_api_key="xai-test", gemini_api_key="gemini-test")


@pytest.fixture
def grok(settings) -> FakeClient:
    return FakeClient("grok", dict(DEFAULT_RESPONSES), settings_source=lambda: settings)


@pytest.fixture
def gemini(settings) -> FakeClient:
    responses = dict(DEFAULT_RESPONSES)
    responses["translate"] = {"translatedCode": "console.log('x')", "explanation": "print maps to console.log"}
    return FakeClient("gemini", responses, settings_source=lambda: settings)


@pytest.fixture
def registry(grok, gemini, settings) -> ProviderRegistry:
    return ProviderRegistry({"grok": grok, "gemini": gemini}, default="grok", settings_source=lambda: settings)


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "test.db"))
    get_settings.cache_clear()
    from codebeat.db.models import init_db

    init_db()
    yield tmp_path / "test.db"
    get_settings.cache_clear()

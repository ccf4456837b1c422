# =============================================================================
# codebeat/llms/base.py — Provider client contract
# =============================================================================
# Every backend implements complete(); the five capabilities (plus lyric
# analysis and chat) are built on top of it here so all clients stay
# substitutable. Subclasses may override a capability to return a different
# raw shape (bare string vs. dict); the facade normalizes either.
#
# One call == one upstream request. No retries.
# =============================================================================

from abc import ABC, abstractmethod
from typing import Any, Callable

from codebeat.core.config import Settings
from codebeat.llms import prompts
from codebeat.llms.parsing import parse_json_payload, strip_code_fences

Message = dict[str, str]


class ProviderClient(ABC):
    key: str = ""

    def __init__(self, settings_source: Callable[[], Settings] = Settings.from_env) -> None:
        self._settings_source = settings_source

    def settings(self) -> Settings:
        return self._settings_source()

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        *,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        json_output: bool = False,
    ) -> str:
        """Send one chat-style request and return the model's text."""

    async def close(self) -> None:
        return None

    async def _ask(self, system: str, user: str, *, temperature: float = 0.7, json_output: bool = False) -> str:
        return await self.complete(
            [{"role": "system", "content": system}, {"role": "user", "content": user}],
            temperature=temperature,
            json_output=json_output,
        )

    async def _ask_json(self, system: str, user: str, *, temperature: float = 0.7) -> dict[str, Any]:
        text = await self._ask(system, user, temperature=temperature, json_output=True)
        return parse_json_payload(text, self.key)

    async def translate_code(self, source_code: str, source_language: str, target_language: str) -> str | dict:
        system, user = prompts.translate_prompt(source_code, source_language, target_language)
        return strip_code_fences(await self._ask(system, user, temperature=0.2))

    async def generate_lyrics(self, prompt: str, mood: str | None = None, genre: str | None = None) -> str | dict:
        system, user = prompts.lyrics_prompt(prompt, mood=mood, genre=genre)
        return await self._ask_json(system, user, temperature=0.9)

    async def generate_beat_pattern(self, genre: str, bpm: int, duration: int) -> dict:
        system, user = prompts.beat_prompt(genre, bpm, duration)
        return await self._ask_json(system, user, temperature=0.7)

    async def code_to_music(self, code: str, language: str) -> dict:
        system, user = prompts.codebeat_prompt(code, language)
        return await self._ask_json(system, user, temperature=0.8)

    async def get_assistance(self, question: str, context: str | None = None) -> str | dict:
        system, user = prompts.assist_prompt(question, context)
        return (await self._ask(system, user, temperature=0.5)).strip()

    async def analyze_lyrics(self, lyrics: str) -> dict:
        system, user = prompts.analyze_prompt(lyrics)
        return await self._ask_json(system, user, temperature=0.3)

    async def chat(self, messages: list[Message], temperature: float = 0.7, max_tokens: int | None = None) -> str:
        return (await self.complete(messages, temperature=temperature, max_tokens=max_tokens)).strip()

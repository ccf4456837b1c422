from typing import Any

from pydantic import Field

from codebeat.schemas.response import CamelModel


class TranslateRequest(CamelModel):
    source_code: str
    source_language: str
    target_language: str
    user_id: str | None = None
    provider: Any = None


class LyricsRequest(CamelModel):
    prompt: str
    mood: str | None = None
    genre: str | None = None
    user_id: str | None = None
    provider: Any = None


class LyricsAnalyzeRequest(CamelModel):
    lyrics: str
    provider: Any = None


class BeatRequest(CamelModel):
    genre: str
    bpm: float
    duration: float | None = None
    user_id: str | None = None
    provider: Any = None


class CodeBeatRequest(CamelModel):
    code: str
    language: str
    user_id: str | None = None
    provider: Any = None


class AssistRequest(CamelModel):
    question: str
    context: str | None = None
    provider: Any = None


class ChatMessage(CamelModel):
    role: str
    content: str


class ChatRequest(CamelModel):
    messages: list[ChatMessage]
    provider: Any = None
    temperature: float = 0.7
    max_tokens: int | None = None


class UserCreate(CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., min_length=3)


class ProjectCreate(CamelModel):
    user_id: str
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None

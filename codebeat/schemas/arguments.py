from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BeforeValidator, Field, StringConstraints

from codebeat.schemas.response import CamelModel

BPM_MIN = 40
BPM_MAX = 220
DURATION_MIN = 1
DURATION_MAX = 300
DEFAULT_BEAT_DURATION = 30
MAX_TEXT_LENGTH = 20_000
TEMPERATURE_MIN = 0.0
TEMPERATURE_MAX = 2.0


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


def _number(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


Text = Annotated[str, StringConstraints(max_length=MAX_TEXT_LENGTH), AfterValidator(_not_blank)]
Bpm = Annotated[int, Field(ge=BPM_MIN, le=BPM_MAX), BeforeValidator(_number)]
Duration = Annotated[int, Field(ge=DURATION_MIN, le=DURATION_MAX), BeforeValidator(_number)]
Temperature = Annotated[float, Field(ge=TEMPERATURE_MIN, le=TEMPERATURE_MAX), BeforeValidator(_number)]
MaxTokens = Annotated[int, Field(gt=0), BeforeValidator(_number)]


class TranslateArgs(CamelModel):
    source_code: Text
    source_language: Text
    target_language: Text


class LyricsArgs(CamelModel):
    prompt: Text
    mood: Text | None = None
    genre: Text | None = None


class BeatArgs(CamelModel):
    genre: Text
    bpm: Bpm
    duration: Duration = DEFAULT_BEAT_DURATION


class CodeMusicArgs(CamelModel):
    code: Text
    language: Text


class AssistArgs(CamelModel):
    question: Text
    context: Text | None = None


class AnalyzeArgs(CamelModel):
    lyrics: Text


class ChatMessageArgs(CamelModel):
    role: Literal["user", "assistant", "system"]
    content: Text


class ChatArgs(CamelModel):
    messages: list[ChatMessageArgs] = Field(..., min_length=1)
    temperature: Temperature = 0.7
    max_tokens: MaxTokens | None = None

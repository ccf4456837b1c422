from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, ValidationError, ValidatorFunctionWrapHandler, WrapValidator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _none_on_error(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    try:
        return handler(value)
    except ValidationError:
        return None


def _empty_on_error(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    try:
        return handler(value)
    except ValidationError:
        return []


# Secondary fields of a model reply: a mistyped value is dropped, the result kept.
OptionalStr = Annotated[str | None, WrapValidator(_none_on_error)]
OptionalInt = Annotated[int | None, WrapValidator(_none_on_error)]
OptionalStrList = Annotated[list[str] | None, WrapValidator(_none_on_error)]
StrList = Annotated[list[str], WrapValidator(_empty_on_error)]


class ProviderDescriptor(CamelModel):
    id: str
    name: str
    description: str
    features: list[str]
    available: bool
    is_default: bool


class GenerationResult(CamelModel):
    """Canonical capability result. ``id`` is set once the handler persists it."""

    provider: str | None = None
    id: str | None = None


class TranslationResult(GenerationResult):
    translated_code: str
    explanation: OptionalStr = None


class LyricsResult(GenerationResult):
    lyrics: str
    title: OptionalStr = None
    structure: OptionalStrList = None


class BeatResult(GenerationResult):
    pattern: dict[str, list[int]] | str
    description: OptionalStr = None


class CodeMusicResult(GenerationResult):
    music: str
    mapping: OptionalStr = None
    tempo: OptionalInt = None
    key: OptionalStr = None


class AssistResult(GenerationResult):
    answer: str


class LyricsAnalysis(GenerationResult):
    analysis: str
    themes: StrList = []
    mood: OptionalStr = None


class ChatResult(GenerationResult):
    message: str


class UserOut(CamelModel):
    id: str
    username: str
    email: str
    created_at: str


class ProjectOut(CamelModel):
    id: str
    user_id: str
    name: str
    description: str | None = None
    created_at: str


class CodeTranslationOut(CamelModel):
    id: str
    user_id: str
    source_language: str
    target_language: str
    source_code: str
    translated_code: str
    created_at: str


class MusicGenerationOut(CamelModel):
    id: str
    user_id: str
    type: str
    prompt: str
    result: dict[str, Any]
    created_at: str

import datetime
import sqlite3
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from codebeat.core.errors import ProviderAuthError, ProviderUpstreamError, ValidationError
from codebeat.db import session as storage
from codebeat.db.models import init_db
from codebeat.llms.router import ProviderRegistry, get_registry
from codebeat.schemas.request import (
    AssistRequest,
    BeatRequest,
    ChatRequest,
    CodeBeatRequest,
    LyricsAnalyzeRequest,
    LyricsRequest,
    ProjectCreate,
    TranslateRequest,
    UserCreate,
)
from codebeat.schemas.response import (
    AssistResult,
    BeatResult,
    ChatResult,
    CodeMusicResult,
    CodeTranslationOut,
    GenerationResult,
    LyricsAnalysis,
    LyricsResult,
    MusicGenerationOut,
    ProjectOut,
    ProviderDescriptor,
    TranslationResult,
    UserOut,
)
from codebeat.services import generation_service as service
from codebeat.utils.logger import logger

ERROR_STATUS = {
    ValidationError: 400,
    ProviderAuthError: 503,
    ProviderUpstreamError: 502,
}


def check_db_connected() -> bool:
    try:
        with storage.get_db_connection() as conn:
            conn.execute("SELECT 1")
        return True
    except sqlite3.Error:
        return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield
    await get_registry().close()


app = FastAPI(title="CodeBeat Studio API", lifespan=lifespan)


def _error_response(request: Request, exc: ValidationError | ProviderAuthError | ProviderUpstreamError):
    return JSONResponse(status_code=ERROR_STATUS[type(exc)], content=exc.to_dict())


for _exc_type in ERROR_STATUS:
    app.add_exception_handler(_exc_type, _error_response)


def _persist_generation(user_id: str, type: str, prompt: str, result: GenerationResult) -> GenerationResult:
    record = storage.create_music_generation(
        user_id=user_id,
        type=type,
        prompt=prompt,
        result=result.model_dump(by_alias=True, exclude={"id"}, exclude_none=True),
    )
    logger.info("generation_persisted", extra={"user_id": user_id, "type": type, "record_id": record["id"]})
    result.id = record["id"]
    return result


@app.get("/")
async def root():
    return {
        "message": "CodeBeat Studio API",
        "docs": "/docs",
        "health": "/api/health",
        "providers": "/api/ai/providers",
    }


@app.get("/api/health")
async def get_health(registry: ProviderRegistry = Depends(get_registry)):
    db_ok = check_db_connected()
    providers = {
        key: "configured" if registry.credentials_present(key) else "missing_key"
        for key in registry.keys()
    }
    return {
        "status": "ok" if db_ok else "degraded",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "database": "connected" if db_ok else "failed",
        "providers": providers,
    }


@app.get("/api/ai/providers", response_model=list[ProviderDescriptor])
async def get_providers(registry: ProviderRegistry = Depends(get_registry)):
    return service.list_providers(registry)


# Users and projects


@app.post("/api/users", response_model=UserOut)
async def post_user(body: UserCreate):
    try:
        return storage.create_user(body.username, body.email)
    except sqlite3.IntegrityError:
        raise HTTPException(status_code=409, detail="Username already exists")


@app.get("/api/users/{user_id}", response_model=UserOut)
async def get_user(user_id: str):
    user = storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@app.post("/api/projects", response_model=ProjectOut)
async def post_project(body: ProjectCreate):
    if not storage.get_user(body.user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return storage.create_project(body.user_id, body.name, body.description)


@app.get("/api/users/{user_id}/projects", response_model=list[ProjectOut])
async def get_user_projects(user_id: str):
    return storage.get_user_projects(user_id)


@app.get("/api/users/{user_id}/translations", response_model=list[CodeTranslationOut])
async def get_user_translations(user_id: str):
    return storage.get_user_code_translations(user_id)


@app.get("/api/users/{user_id}/music-generations", response_model=list[MusicGenerationOut])
async def get_user_music_generations(user_id: str):
    return storage.get_user_music_generations(user_id)


# Generation


@app.post("/api/code/translate", response_model=TranslationResult, response_model_exclude_none=True)
async def post_translate(body: TranslateRequest, registry: ProviderRegistry = Depends(get_registry)):
    result = await service.translate(
        registry,
        body.source_code,
        body.source_language,
        body.target_language,
        provider=body.provider,
    )
    if body.user_id:
        record = storage.create_code_translation(
            user_id=body.user_id,
            source_language=body.source_language,
            target_language=body.target_language,
            source_code=body.source_code,
            translated_code=result.translated_code,
        )
        logger.info(
            "generation_persisted",
            extra={"user_id": body.user_id, "type": "translation", "record_id": record["id"]},
        )
        result.id = record["id"]
    return result


@app.post("/api/lyrics/generate", response_model=LyricsResult, response_model_exclude_none=True)
async def post_lyrics_generate(body: LyricsRequest, registry: ProviderRegistry = Depends(get_registry)):
    result = await service.generate_lyrics(
        registry, body.prompt, mood=body.mood, genre=body.genre, provider=body.provider
    )
    if body.user_id:
        _persist_generation(body.user_id, "lyrics", body.prompt, result)
    return result


@app.post("/api/lyrics/analyze", response_model=LyricsAnalysis, response_model_exclude_none=True)
async def post_lyrics_analyze(body: LyricsAnalyzeRequest, registry: ProviderRegistry = Depends(get_registry)):
    return await service.analyze_lyrics(registry, body.lyrics, provider=body.provider)


@app.post("/api/beat/generate", response_model=BeatResult, response_model_exclude_none=True)
async def post_beat_generate(body: BeatRequest, registry: ProviderRegistry = Depends(get_registry)):
    result = await service.generate_beat(
        registry, body.genre, body.bpm, duration=body.duration, provider=body.provider
    )
    if body.user_id:
        _persist_generation(body.user_id, "beat", f"{body.genre} beat at {int(body.bpm)} BPM", result)
    return result


@app.post("/api/codebeat/convert", response_model=CodeMusicResult, response_model_exclude_none=True)
async def post_codebeat_convert(body: CodeBeatRequest, registry: ProviderRegistry = Depends(get_registry)):
    result = await service.code_to_music(registry, body.code, body.language, provider=body.provider)
    if body.user_id:
        _persist_generation(body.user_id, "codebeat", f"Convert {body.language} code to music", result)
    return result


@app.post("/api/ai/assist", response_model=AssistResult, response_model_exclude_none=True)
async def post_assist(body: AssistRequest, registry: ProviderRegistry = Depends(get_registry)):
    return await service.assist(registry, body.question, context=body.context, provider=body.provider)


@app.post("/api/ai/chat", response_model=ChatResult, response_model_exclude_none=True)
async def post_chat(body: ChatRequest, registry: ProviderRegistry = Depends(get_registry)):
    return await service.chat(
        registry,
        [m.model_dump() for m in body.messages],
        temperature=body.temperature,
        max_tokens=body.max_tokens,
        provider=body.provider,
    )

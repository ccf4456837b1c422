import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_DATABASE_PATH = str(Path(__file__).resolve().parent.parent.parent / "codebeat.db")


class Settings(BaseModel):
    xai_api_key: str = ""
    gemini_api_key: str = ""
    grok_base_url: str = "https://api.x.ai/v1"
    grok_model: str = "grok-2-latest"
    gemini_model: str = "gemini-1.5-flash"
    default_provider: str = "grok"
    request_timeout: int = 60
    database_path: str = DEFAULT_DATABASE_PATH
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            xai_api_key=os.getenv("XAI_API_KEY") or os.getenv("GROK_API_KEY", ""),
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            grok_base_url=os.getenv("GROK_BASE_URL", "https://api.x.ai/v1"),
            grok_model=os.getenv("GROK_MODEL", "grok-2-latest"),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
            default_provider=os.getenv("DEFAULT_AI_PROVIDER", "grok"),
            request_timeout=int(os.getenv("REQUEST_TIMEOUT", "60")),
            database_path=os.getenv("DATABASE_PATH", DEFAULT_DATABASE_PATH),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()

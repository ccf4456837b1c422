from codebeat.core.config import Settings
from codebeat.core.errors import ProviderAuthError


def require_grok_key(settings: Settings) -> str:
    key = settings.xai_api_key
    if not key or not key.strip():
        raise ProviderAuthError("grok", "XAI_API_KEY is not set")
    return key


def require_gemini_key(settings: Settings) -> str:
    key = settings.gemini_api_key
    if not key or not key.strip():
        raise ProviderAuthError("gemini", "GEMINI_API_KEY is not set")
    return key

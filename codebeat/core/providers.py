from codebeat.core.config import Settings

CAPABILITIES = ("translate", "lyrics", "beat", "codebeat", "assist")
# Everything a client serves, core capabilities first.
FEATURES = CAPABILITIES + ("analyze", "chat")

PROVIDERS = {
    "grok": {
        "name": "Grok",
        "description": "xAI Grok chat models via the OpenAI-compatible API",
        "features": list(FEATURES),
        "credentials": ("xai_api_key",),
    },
    "gemini": {
        "name": "Gemini",
        "description": "Google Gemini models via the Generative Language API",
        "features": list(FEATURES),
        "credentials": ("gemini_api_key",),
    },
}


def credentials_present(provider: str, settings: Settings) -> bool:
    meta = PROVIDERS.get(provider)
    if meta is None:
        return False
    return all((getattr(settings, field, "") or "").strip() for field in meta["credentials"])

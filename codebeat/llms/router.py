# =============================================================================
# codebeat/llms/router.py — Provider registry and dispatch
# =============================================================================
# resolve() never fails: None, "", unknown strings and non-string values all
# fall back to the default provider. Availability is recomputed on every
# list_providers() call from a fresh settings snapshot.
# =============================================================================

from functools import lru_cache
from typing import Any, Callable

from codebeat.core.config import Settings
from codebeat.core.providers import PROVIDERS, credentials_present
from codebeat.llms.base import ProviderClient
from codebeat.llms.gemini_client import GeminiClient
from codebeat.llms.grok_client import GrokClient
from codebeat.schemas.response import ProviderDescriptor
from codebeat.utils.logger import logger

DEFAULT_PROVIDER = "grok"


class ProviderRegistry:
    def __init__(
        self,
        clients: dict[str, ProviderClient],
        default: str,
        settings_source: Callable[[], Settings] = Settings.from_env,
        metadata: dict[str, dict] | None = None,
    ) -> None:
        if default not in clients:
            raise ValueError(f"Default provider {default!r} is not registered")
        self._clients = dict(clients)
        self._default = default
        self._settings_source = settings_source
        self._metadata = metadata if metadata is not None else PROVIDERS

    @property
    def default(self) -> str:
        return self._default

    def keys(self) -> tuple[str, ...]:
        return tuple(self._clients)

    def credentials_present(self, key: str) -> bool:
        return credentials_present(key, self._settings_source())

    def list_providers(self) -> list[ProviderDescriptor]:
        settings = self._settings_source()
        descriptors = []
        for key in self._clients:
            meta = self._metadata.get(key, {})
            descriptors.append(
                ProviderDescriptor(
                    id=key,
                    name=meta.get("name", key),
                    description=meta.get("description", ""),
                    features=list(meta.get("features", [])),
                    available=credentials_present(key, settings),
                    is_default=key == self._default,
                )
            )
        return descriptors

    def resolve_key(self, key: Any) -> str:
        if isinstance(key, str) and key in self._clients:
            return key
        if key not in (None, ""):
            logger.debug("provider_fallback", extra={"requested": repr(key), "provider": self._default})
        return self._default

    def resolve(self, key: Any = None) -> ProviderClient:
        return self._clients[self.resolve_key(key)]

    async def close(self) -> None:
        for client in self._clients.values():
            await client.close()


def build_registry(settings_source: Callable[[], Settings] = Settings.from_env) -> ProviderRegistry:
    clients: dict[str, ProviderClient] = {
        "grok": GrokClient(settings_source),
        "gemini": GeminiClient(settings_source),
    }
    default = settings_source().default_provider
    if default not in clients:
        logger.warning(
            "invalid_default_provider",
            extra={"configured": default, "provider": DEFAULT_PROVIDER},
        )
        default = DEFAULT_PROVIDER
    return ProviderRegistry(clients, default=default, settings_source=settings_source)


@lru_cache
def get_registry() -> ProviderRegistry:
    return build_registry()

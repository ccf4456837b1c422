# =============================================================================
# codebeat/core/errors.py — Error taxonomy shared by the facade and clients
# =============================================================================
# ValidationError        bad input shape/range, raised before any provider call
# ProviderAuthError      missing or rejected credential for the resolved provider
# ProviderUpstreamError  network/backend failure or malformed response
# =============================================================================

from typing import Any


class CodeBeatError(Exception):
    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class ValidationError(CodeBeatError):
    kind = "validation_error"

    def __init__(self, field: str, constraint: str, message: str | None = None) -> None:
        super().__init__(message or f"{field}: {constraint}")
        self.field = field
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "field": self.field, "constraint": self.constraint}


class ProviderAuthError(CodeBeatError):
    kind = "provider_auth_error"

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(message)
        self.provider = provider

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "provider": self.provider}


class ProviderUpstreamError(CodeBeatError):
    kind = "provider_upstream_error"

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(message)
        self.provider = provider

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "provider": self.provider}

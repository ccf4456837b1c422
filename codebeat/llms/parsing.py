import json
import re
from typing import Any

from codebeat.core.errors import ProviderUpstreamError

_FENCE_RE = re.compile(r"^\s*```[\w+#.-]*\s*\n(.*?)\n?```\s*$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a single surrounding markdown code fence, if present."""
    m = _FENCE_RE.match(text or "")
    if m:
        return m.group(1).strip()
    return (text or "").strip()


def parse_json_payload(text: str, provider: str) -> dict[str, Any]:
    body = strip_code_fences(text)
    if not body:
        raise ProviderUpstreamError(provider, f"{provider} returned an empty response")
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        # Some models wrap the object in prose; take the outermost braces.
        start, end = body.find("{"), body.rfind("}")
        if start == -1 or end <= start:
            raise ProviderUpstreamError(provider, f"{provider} returned non-JSON output: {body[:200]}") from None
        try:
            data = json.loads(body[start : end + 1])
        except json.JSONDecodeError as e:
            raise ProviderUpstreamError(provider, f"{provider} returned malformed JSON: {e}") from e
    if not isinstance(data, dict):
        raise ProviderUpstreamError(provider, f"{provider} returned JSON {type(data).__name__}, expected object")
    return data

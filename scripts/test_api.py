# =============================================================================
# scripts/test_api.py — Quick API smoke test (run with backend on 127.0.0.1:8000)
# =============================================================================
# Usage: python scripts/test_api.py
# Generation checks need XAI_API_KEY and/or GEMINI_API_KEY on the server.
# =============================================================================

import os
import sys

import requests

BASE = os.environ.get("BASE_URL", "http://127.0.0.1:8000")
TIMEOUT = 5


def get(path: str) -> dict | list | None:
    try:
        r = requests.get(f"{BASE}{path}", timeout=TIMEOUT)
        r.raise_for_status()
        return r.json()
    except requests.RequestException as e:
        print(f"GET {path} failed: {e}")
        return None


def post(path: str, json: dict) -> tuple[dict | list | None, int | None]:
    try:
        r = requests.post(f"{BASE}{path}", json=json, timeout=90)
    except requests.RequestException as e:
        print(f"POST {path} failed: {e}")
        return None, None
    if r.ok:
        return r.json(), r.status_code
    print(f"POST {path} failed (status={r.status_code}): {r.text[:500]}")
    return None, r.status_code


def main() -> int:
    print("1. GET /api/health ...")
    h = get("/api/health")
    if not h:
        print("   Backend not reachable. Start with: uvicorn codebeat.main:app --host 127.0.0.1 --port 8000")
        return 1
    print("   OK:", h.get("status"), "| providers:", h.get("providers"))

    print("2. GET /api/ai/providers ...")
    providers = get("/api/ai/providers")
    if providers is None:
        return 1
    for p in providers:
        flag = " (default)" if p.get("isDefault") else ""
        print(f"   {p['id']}{flag}: available={p['available']}")
    available = [p["id"] for p in providers if p["available"]]

    print("3. POST /api/beat/generate with bpm=300 (expect 400) ...")
    _, status = post("/api/beat/generate", {"genre": "trap", "bpm": 300})
    if status != 400:
        print("   Expected 400, got", status)
        return 1
    print("   OK: rejected")

    if not available:
        print("   Skip generation: set XAI_API_KEY or GEMINI_API_KEY on the server.")
        print("All checks passed.")
        return 0

    for provider in available:
        print(f"4. POST /api/code/translate (provider={provider}) ...")
        out, status = post("/api/code/translate", {
            "sourceCode": "print('hello')",
            "sourceLanguage": "python",
            "targetLanguage": "javascript",
            "provider": provider,
        })
        if not out:
            return 1
        print("   translatedCode:", (out.get("translatedCode") or "")[:200])

        print(f"5. POST /api/ai/assist (provider={provider}) ...")
        out, status = post("/api/ai/assist", {"question": "What is a BPM?", "provider": provider})
        if not out:
            return 1
        print("   answer (first 200 chars):", (out.get("answer") or "")[:200])

    print("All checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

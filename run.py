# =============================================================================
# run.py — Starts the CodeBeat Studio API with uvicorn
# =============================================================================
# Usage: python run.py [--reload]
# Backend: http://127.0.0.1:8000 (HOST / PORT override)
# =============================================================================

import os
import sys

import uvicorn

BACKEND_HOST = os.environ.get("HOST", "127.0.0.1")
BACKEND_PORT = int(os.environ.get("PORT", "8000"))


def main() -> None:
    print(f"Starting CodeBeat Studio API on http://{BACKEND_HOST}:{BACKEND_PORT} ...")
    uvicorn.run(
        "codebeat.main:app",
        host=BACKEND_HOST,
        port=BACKEND_PORT,
        reload="--reload" in sys.argv[1:],
    )


if __name__ == "__main__":
    main()

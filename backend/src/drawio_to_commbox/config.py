"""Load settings from environment (.env and env vars)."""

from __future__ import annotations

import os
from pathlib import Path

# Load .env from backend root if present
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
if _env_path.exists():
    from dotenv import load_dotenv
    load_dotenv(_env_path)


def _str(key: str, default: str = "") -> str:
    return (os.environ.get(key) or "").strip() or default


def _int(key: str, default: int) -> int:
    try:
        return int(_str(key))
    except ValueError:
        return default


def _list(key: str, default: list[str]) -> list[str]:
    raw = _str(key)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


# Server
HOST = _str("HOST", "0.0.0.0")
PORT = _int("PORT", 5000)
FRONTEND_URLS = _list("FRONTEND_URL", ["http://localhost:5173", "http://localhost:3000"])

# Upload
MAX_UPLOAD_BYTES = _int("MAX_UPLOAD_BYTES", 10 * 1024 * 1024)
# Ceiling on the inflated mxGraphModel size
MAX_MODEL_BYTES = _int("MAX_MODEL_BYTES", 50 * 1024 * 1024)

# Logging
LOG_LEVEL = _str("LOG_LEVEL", "INFO").upper()

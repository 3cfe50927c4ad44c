"""Centralised settings for the Event Swipe API.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

Invalid values never raise: every reader falls back to its default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_JSON_BODY_LIMIT = 100 * 1024
MAX_PORT = 65535


def is_ascii_digits(value: str) -> bool:
    """True when *value* is a non-empty run of ASCII 0-9 that ``int()`` accepts."""
    return value.isascii() and value.isdigit()


def configure_port(raw: Optional[str] = None) -> int:
    """Return the listening port taken from *raw* (or ``$PORT``).

    Anything that is not a decimal integer in ``1..65535`` yields
    :data:`DEFAULT_PORT`.
    """
    if raw is None:
        raw = os.environ.get("PORT")
    if raw is None:
        return DEFAULT_PORT
    raw = raw.strip()
    if not is_ascii_digits(raw):
        return DEFAULT_PORT
    port = int(raw)
    if port < 1 or port > MAX_PORT:
        return DEFAULT_PORT
    return port


def _positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not is_ascii_digits(raw) or int(raw) < 1:
        return default
    return int(raw)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------
    port: int = field(default_factory=configure_port)
    host: str = field(
        default_factory=lambda: os.environ.get("HOST") or DEFAULT_HOST
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "info").lower()
    )

    # ------------------------------------------------------------------
    # Request parsing
    # ------------------------------------------------------------------
    json_body_limit: int = field(
        default_factory=lambda: _positive_int("JSON_BODY_LIMIT", DEFAULT_JSON_BODY_LIMIT)
    )


# Module-level singleton; import this everywhere:
#   from backend.config import settings
settings = Settings()

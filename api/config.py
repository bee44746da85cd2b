"""API server configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Application settings, configurable via environment variables.

    Environment variables:
        OPENAI_API_KEY: Provider credential (required for synthesis)
        OPENAI_BASE_URL: Provider base URL override (default: the SDK's own)
        TTS_HOST: Server bind address (default "0.0.0.0")
        TTS_PORT: Server port (default 8000)
        TTS_DEBUG: Enable debug mode ("1" or "true")
        TTS_CORS_ORIGINS: Comma-separated allowed origins (default: none, reject cross-origin)
        TTS_LOG_LEVEL: Root log level (default "INFO")
    """

    openai_api_key: str | None = field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY") or None, repr=False
    )
    openai_base_url: str | None = field(
        default_factory=lambda: os.getenv("OPENAI_BASE_URL") or None
    )
    host: str = field(default_factory=lambda: os.getenv("TTS_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("TTS_PORT", "8000")))
    debug: bool = field(
        default_factory=lambda: os.getenv("TTS_DEBUG", "").lower() in ("1", "true")
    )
    cors_origins: list[str] = field(default_factory=lambda: _parse_cors())
    log_level: str = field(default_factory=lambda: os.getenv("TTS_LOG_LEVEL", "INFO").upper())


def _parse_cors() -> list[str]:
    raw = os.getenv("TTS_CORS_ORIGINS", "")
    if not raw:
        return []
    return [o.strip() for o in raw.split(",") if o.strip()]

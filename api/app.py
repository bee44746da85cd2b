"""FastAPI application for the speech-preview REST API.

Endpoints:
  POST /api/text-to-speech
  GET  /api/text-to-speech/options
  GET  /api/health
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from speech_preview import __version__
from speech_preview.exceptions import (
    ConfigurationError,
    ProviderError,
    SpeechPreviewError,
    SynthesisValidationError,
    UnexpectedError,
)

from .config import Settings
from .routes import text_to_speech
from .routes.text_to_speech import UNEXPECTED_MESSAGE

settings = Settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Speech Preview API",
    description="Validate text and synthesize it to MP3 through the OpenAI speech API.",
    version=__version__,
)

# CORS: only allow configured origins. Empty list → no cross-origin access.
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

app.include_router(text_to_speech.router, prefix="/api", tags=["text-to-speech"])


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("Configuration error: %s", exc)
    return _error(500, str(exc))


@app.exception_handler(SynthesisValidationError)
async def validation_error_handler(
    request: Request, exc: SynthesisValidationError
) -> JSONResponse:
    return _error(400, exc.message)


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


@app.exception_handler(UnexpectedError)
async def unexpected_error_handler(request: Request, exc: UnexpectedError) -> JSONResponse:
    return _error(500, UNEXPECTED_MESSAGE)


@app.exception_handler(SpeechPreviewError)
async def speech_preview_error_handler(
    request: Request, exc: SpeechPreviewError
) -> JSONResponse:
    logger.error("Unhandled speech_preview error: %s", exc)
    return _error(500, UNEXPECTED_MESSAGE)


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return _error(500, UNEXPECTED_MESSAGE)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@app.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}

"""Text-to-speech endpoint: validate, forward to the provider, return MP3."""

from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from pydantic import BaseModel

from speech_preview import (
    ConfigurationError,
    SpeechPreviewError,
    SpeechSynthesizer,
    SynthesisValidationError,
    UnexpectedError,
    parse_synthesis_request,
)
from speech_preview.models import catalogue

from ..config import Settings

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_KEY_MESSAGE = (
    "OpenAI API key is not configured. Please set OPENAI_API_KEY in the environment."
)
UNEXPECTED_MESSAGE = "An unexpected error occurred while generating speech"

SynthesizerFactory = Callable[..., SpeechSynthesizer]


class Option(BaseModel):
    value: str
    label: str


class OptionsResponse(BaseModel):
    voices: list[Option]
    models: list[Option]
    max_text_length: int


def get_settings() -> Settings:
    return Settings()


def get_synthesizer_factory() -> SynthesizerFactory:
    return SpeechSynthesizer.from_api_key


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise SynthesisValidationError("Request body must be a JSON object") from exc


@router.post(
    "/text-to-speech",
    response_class=Response,
    responses={200: {"content": {"audio/mpeg": {}}}},
)
async def text_to_speech(
    request: Request,
    settings: Settings = Depends(get_settings),
    make_synthesizer: SynthesizerFactory = Depends(get_synthesizer_factory),
) -> Response:
    if not settings.openai_api_key:
        raise ConfigurationError(MISSING_KEY_MESSAGE)

    synthesis_request = parse_synthesis_request(await _read_json(request))

    try:
        async with make_synthesizer(
            settings.openai_api_key, base_url=settings.openai_base_url
        ) as synthesizer:
            result = await synthesizer.synthesize(synthesis_request)
    except SpeechPreviewError:
        raise
    except Exception as exc:
        logger.exception("Text-to-speech failed")
        raise UnexpectedError(UNEXPECTED_MESSAGE) from exc

    return Response(
        content=result.audio,
        media_type=result.media_type,
        headers={"Content-Length": str(result.content_length)},
    )


@router.get("/text-to-speech/options", response_model=OptionsResponse)
async def text_to_speech_options() -> OptionsResponse:
    return OptionsResponse(**catalogue())

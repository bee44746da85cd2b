"""SpeechSynthesizer -- one round trip to the provider's speech endpoint.

Wraps ``openai.AsyncOpenAI().audio.speech.create``.  The call is made
once, without streaming and without retries; the complete MP3 payload is
returned as a :class:`~speech_preview.models.SynthesisResult`.  Use the
synthesizer as an async context manager so the provider client is closed
after the request.
"""

from __future__ import annotations

import logging

import openai

from .exceptions import ProviderError
from .models import SynthesisRequest, SynthesisResult

logger = logging.getLogger(__name__)


class SpeechSynthesizer:
    """Synthesize speech through the provider's API.

    Parameters
    ----------
    client:
        An ``openai.AsyncOpenAI`` instance (or anything exposing
        ``audio.speech.create`` with the same signature).
    """

    def __init__(self, client: openai.AsyncOpenAI) -> None:
        self.client = client

    @classmethod
    def from_api_key(cls, api_key: str, base_url: str | None = None) -> SpeechSynthesizer:
        """Build a synthesizer with a fresh provider client.

        Retries are disabled: a failed call is reported back to the caller
        rather than replayed.
        """
        client = openai.AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        return cls(client)

    async def aclose(self) -> None:
        """Close the provider client and its connection pool."""
        await self.client.close()

    async def __aenter__(self) -> SpeechSynthesizer:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def synthesize(self, request: SynthesisRequest) -> SynthesisResult:
        """Send *request* to the provider and return the audio bytes.

        Raises
        ------
        ProviderError
            When the provider answers with an error status.  The status
            code and message are carried through unchanged.
        """
        try:
            response = await self.client.audio.speech.create(**request.to_provider_params())
        except openai.APIStatusError as exc:
            message = exc.message or "Unknown error"
            logger.warning(
                "Provider rejected synthesis (status %s): %s", exc.status_code, message
            )
            raise ProviderError(f"OpenAI API error: {message}", exc.status_code) from exc

        result = SynthesisResult(audio=response.content)
        logger.info(
            "Synthesized %d characters with voice=%s model=%s (%d bytes)",
            len(request.text),
            request.voice,
            request.model,
            result.content_length,
        )
        return result

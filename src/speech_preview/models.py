"""Data models for synthesis requests and results.

Immutable dataclasses plus the voice/model catalogue accepted by the
speech provider.  A :class:`SynthesisRequest` is only ever produced by
:mod:`speech_preview.validator`, so holding one means its fields are
already known to be valid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

VOICES: tuple[str, ...] = ("alloy", "echo", "fable", "onyx", "nova", "shimmer")
MODELS: tuple[str, ...] = ("tts-1", "tts-1-hd")

VOICE_LABELS: dict[str, str] = {voice: voice.capitalize() for voice in VOICES}
MODEL_LABELS: dict[str, str] = {
    "tts-1": "Standard (tts-1)",
    "tts-1-hd": "HD (tts-1-hd)",
}

DEFAULT_VOICE = "alloy"
DEFAULT_MODEL = "tts-1"

MAX_TEXT_LENGTH = 4096  # Provider-imposed input limit, in characters.

RESPONSE_FORMAT = "mp3"
AUDIO_MEDIA_TYPE = "audio/mpeg"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SynthesisRequest:
    """A validated request to synthesize ``text`` with a voice and model."""

    text: str
    voice: str = DEFAULT_VOICE
    model: str = DEFAULT_MODEL

    def to_provider_params(self) -> dict[str, Any]:
        """Keyword arguments for the provider's speech call."""
        return {
            "model": self.model,
            "voice": self.voice,
            "input": self.text,
            "response_format": RESPONSE_FORMAT,
        }


@dataclass(frozen=True)
class SynthesisResult:
    """Raw audio returned by the provider for one request."""

    audio: bytes
    media_type: str = AUDIO_MEDIA_TYPE

    @property
    def content_length(self) -> int:
        return len(self.audio)


def catalogue() -> dict[str, Any]:
    """Voices and models with display labels, in presentation order."""
    return {
        "voices": [{"value": v, "label": VOICE_LABELS[v]} for v in VOICES],
        "models": [{"value": m, "label": MODEL_LABELS[m]} for m in MODELS],
        "max_text_length": MAX_TEXT_LENGTH,
    }

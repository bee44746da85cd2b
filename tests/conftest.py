"""Shared test fixtures for the speech_preview test suite."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from speech_preview.exceptions import SpeechClientError
from speech_preview.models import SynthesisRequest, SynthesisResult

# A few bytes that look like the start of an MP3 with an ID3 tag.
FAKE_MP3 = b"ID3\x04\x00\x00\x00\x00\x00\x00" + b"\xff\xfb\x90\x64" * 32


# ---------------------------------------------------------------------------
# Provider-side fakes
# ---------------------------------------------------------------------------


class FakeSynthesizer:
    """Stands in for SpeechSynthesizer; records requests, returns FAKE_MP3."""

    def __init__(self, audio: bytes = FAKE_MP3, error: Exception | None = None) -> None:
        self.audio = audio
        self.error = error
        self.requests: list[SynthesisRequest] = []
        self.factory_calls: list[tuple[str, str | None]] = []
        self.closed = 0

    def factory(self, api_key: str, base_url: str | None = None) -> FakeSynthesizer:
        self.factory_calls.append((api_key, base_url))
        return self

    async def __aenter__(self) -> FakeSynthesizer:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.closed += 1

    async def synthesize(self, request: SynthesisRequest) -> SynthesisResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return SynthesisResult(audio=self.audio)


class FakeSpeechAPI:
    """Mimics ``openai.AsyncOpenAI().audio.speech`` for one canned outcome."""

    def __init__(self, content: bytes = FAKE_MP3, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    async def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.content)

    async def close(self) -> None:
        self.closed = True

    def as_client(self) -> SimpleNamespace:
        return SimpleNamespace(audio=SimpleNamespace(speech=self), close=self.close)


# ---------------------------------------------------------------------------
# Client-side fakes
# ---------------------------------------------------------------------------


class FakeBackend:
    """SpeechBackend returning queued outcomes (bytes or SpeechClientError)."""

    def __init__(self, *outcomes: bytes | Exception) -> None:
        self.outcomes = list(outcomes) or [FAKE_MP3]
        self.calls: list[tuple[str, str, str]] = []

    def synthesize(self, text: str, voice: str, model: str) -> bytes:
        self.calls.append((text, voice, model))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class MemoryHost:
    """AudioHost keeping handles and downloads in memory."""

    def __init__(self) -> None:
        self._next = 0
        self.live: dict[str, bytes] = {}
        self.released: list[str] = []
        self.saved: dict[str, bytes] = {}
        self.max_live = 0

    def create_playable_handle(self, audio: bytes) -> str:
        self._next += 1
        handle = f"blob:{self._next}"
        self.live[handle] = audio
        self.max_live = max(self.max_live, len(self.live))
        return handle

    def release(self, handle: str) -> None:
        del self.live[handle]
        self.released.append(handle)

    def persist(self, audio: bytes, filename: str) -> None:
        self.saved[filename] = audio


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_mp3() -> bytes:
    return FAKE_MP3


@pytest.fixture()
def memory_host() -> MemoryHost:
    return MemoryHost()


@pytest.fixture()
def client_error() -> SpeechClientError:
    return SpeechClientError("OpenAI API error: Rate limit reached", status_code=429)

"""Tests for speech_preview.synthesizer."""

from __future__ import annotations

import asyncio
import logging

import httpx
import openai
import pytest
from conftest import FAKE_MP3, FakeSpeechAPI

from speech_preview.exceptions import ProviderError
from speech_preview.models import SynthesisRequest
from speech_preview.synthesizer import SpeechSynthesizer


def _status_error(status: int, message: str) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://api.openai.com/v1/audio/speech")
    return openai.APIStatusError(
        message, response=httpx.Response(status, request=request), body=None
    )


class TestSynthesize:
    def test_returns_provider_bytes(self) -> None:
        speech = FakeSpeechAPI()
        synth = SpeechSynthesizer(speech.as_client())
        result = asyncio.run(synth.synthesize(SynthesisRequest(text="Hello")))
        assert result.audio == FAKE_MP3
        assert result.content_length == len(FAKE_MP3)

    def test_single_call_with_mp3_format(self) -> None:
        speech = FakeSpeechAPI()
        synth = SpeechSynthesizer(speech.as_client())
        asyncio.run(synth.synthesize(SynthesisRequest(text="Hi", voice="fable")))
        assert speech.calls == [
            {"model": "tts-1", "voice": "fable", "input": "Hi", "response_format": "mp3"}
        ]

    def test_logs_success(self, caplog: pytest.LogCaptureFixture) -> None:
        synth = SpeechSynthesizer(FakeSpeechAPI().as_client())
        with caplog.at_level(logging.INFO, logger="speech_preview.synthesizer"):
            asyncio.run(synth.synthesize(SynthesisRequest(text="Hello")))
        assert "voice=alloy" in caplog.text


class TestProviderFailures:
    def test_status_error_becomes_provider_error(self) -> None:
        speech = FakeSpeechAPI(error=_status_error(400, "Input too long"))
        synth = SpeechSynthesizer(speech.as_client())
        with pytest.raises(ProviderError) as info:
            asyncio.run(synth.synthesize(SynthesisRequest(text="Hello")))
        assert info.value.status_code == 400
        assert info.value.message == "OpenAI API error: Input too long"
        assert len(speech.calls) == 1

    def test_empty_provider_message(self) -> None:
        speech = FakeSpeechAPI(error=_status_error(503, ""))
        synth = SpeechSynthesizer(speech.as_client())
        with pytest.raises(ProviderError, match="Unknown error"):
            asyncio.run(synth.synthesize(SynthesisRequest(text="Hello")))

    def test_other_errors_propagate(self) -> None:
        request = httpx.Request("POST", "https://api.openai.com/v1/audio/speech")
        speech = FakeSpeechAPI(error=openai.APIConnectionError(request=request))
        synth = SpeechSynthesizer(speech.as_client())
        with pytest.raises(openai.APIConnectionError):
            asyncio.run(synth.synthesize(SynthesisRequest(text="Hello")))


class TestFromApiKey:
    def test_builds_client_without_retries(self) -> None:
        synth = SpeechSynthesizer.from_api_key("sk-test", base_url="http://provider.local/v1")
        assert isinstance(synth.client, openai.AsyncOpenAI)
        assert synth.client.api_key == "sk-test"
        assert synth.client.max_retries == 0
        assert str(synth.client.base_url).startswith("http://provider.local/v1")

    def test_context_manager_closes_provider_client(self) -> None:
        async def run() -> SpeechSynthesizer:
            async with SpeechSynthesizer.from_api_key("sk-test") as synth:
                assert not synth.client.is_closed()
            return synth

        synth = asyncio.run(run())
        assert synth.client.is_closed()


class TestClose:
    def test_closes_after_provider_error(self) -> None:
        speech = FakeSpeechAPI(error=_status_error(500, "Server error"))

        async def run() -> None:
            async with SpeechSynthesizer(speech.as_client()) as synth:
                await synth.synthesize(SynthesisRequest(text="Hello"))

        with pytest.raises(ProviderError):
            asyncio.run(run())
        assert speech.closed is True

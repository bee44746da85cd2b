"""HTTP client for the text-to-speech proxy endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .exceptions import SpeechClientError
from .models import DEFAULT_MODEL, DEFAULT_VOICE

logger = logging.getLogger(__name__)

SPEECH_PATH = "/api/text-to-speech"
OPTIONS_PATH = "/api/text-to-speech/options"

FALLBACK_ERROR = "Failed to generate speech"

DEFAULT_TIMEOUT = httpx.Timeout(60.0, connect=5.0)


class SpeechClient:
    """Post synthesis requests to a running proxy and return MP3 bytes.

    Parameters
    ----------
    base_url:
        Root URL of the proxy, e.g. ``http://localhost:8000``.  Ignored
        when *http_client* is given.
    http_client:
        A preconfigured ``httpx.Client`` (a ``fastapi.testclient.TestClient``
        works too).  The caller keeps ownership of it.
    timeout:
        Per-request timeout for the client created here.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http_client: httpx.Client | None = None,
        timeout: httpx.Timeout | float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def synthesize(
        self, text: str, voice: str = DEFAULT_VOICE, model: str = DEFAULT_MODEL
    ) -> bytes:
        """Request speech for *text* and return the audio payload.

        Raises
        ------
        SpeechClientError
            On a transport failure or a non-2xx response.  The message is
            the server's ``error`` field when it sent one.
        """
        try:
            response = self._http.post(
                SPEECH_PATH, json={"text": text, "voice": voice, "model": model}
            )
        except httpx.HTTPError as exc:
            logger.warning("Speech request failed in transport: %s", exc)
            raise SpeechClientError(str(exc) or FALLBACK_ERROR) from exc

        if not response.is_success:
            message = _error_message(response)
            logger.warning("Speech request rejected (%d): %s", response.status_code, message)
            raise SpeechClientError(message, status_code=response.status_code)

        return response.content

    def options(self) -> dict[str, Any]:
        """Fetch the voice/model catalogue from the proxy."""
        try:
            response = self._http.get(OPTIONS_PATH)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise SpeechClientError(str(exc) or "Failed to load options") from exc
        return response.json()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> SpeechClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return FALLBACK_ERROR
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return FALLBACK_ERROR

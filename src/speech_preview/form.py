"""FormController -- the preview / finalize / download workflow.

Holds the state of one text-to-speech form session and drives it through

    IDLE -> LOADING -> PREVIEWED -> FINALIZED

A failed request returns the session to IDLE.  Playing and saving audio
go through an :class:`AudioHost`, so the workflow itself does not depend
on any particular environment (browser, desktop, filesystem, tests).

At most one playable handle is held at a time: the previous handle is
released before a new request starts.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Any, Callable, Protocol

from .exceptions import SpeechClientError
from .models import DEFAULT_MODEL, DEFAULT_VOICE, MAX_TEXT_LENGTH

logger = logging.getLogger(__name__)

MSG_EMPTY_TEXT = "Please enter some text to convert to speech"
MSG_TOO_LONG = f"Text exceeds maximum length of {MAX_TEXT_LENGTH} characters"
MSG_PREVIEW_READY = "Preview generated! Listen and finalize when ready."
MSG_FINALIZED = "Audio finalized! You can now download your MP3."
MSG_DOWNLOADED = "MP3 downloaded!"
MSG_FAILED = "Failed to generate speech"


# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------


class SpeechBackend(Protocol):
    """Anything that turns text into MP3 bytes (normally a SpeechClient)."""

    def synthesize(self, text: str, voice: str, model: str) -> bytes: ...


class AudioHost(Protocol):
    """Environment services for playing and saving audio."""

    def create_playable_handle(self, audio: bytes) -> Any:
        """Make *audio* playable and return an opaque handle to it."""
        ...

    def release(self, handle: Any) -> None:
        """Free a handle returned by :meth:`create_playable_handle`."""
        ...

    def persist(self, audio: bytes, filename: str) -> Any:
        """Save *audio* under *filename* (the user's download)."""
        ...


class Notifier(Protocol):
    """Transient user notifications."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier that writes to the module logger."""

    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.error(message)


class RecordingNotifier:
    """Notifier that keeps ``(level, message)`` pairs in memory."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    @property
    def errors(self) -> list[str]:
        return [m for level, m in self.messages if level == "error"]


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class FormState(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    PREVIEWED = "previewed"
    FINALIZED = "finalized"


class FormController:
    """One form session.

    Parameters
    ----------
    backend:
        Performs synthesis, usually a :class:`~speech_preview.client.SpeechClient`.
    host:
        Creates, releases and persists audio.
    notifier:
        Receives user-facing messages.  Defaults to :class:`LoggingNotifier`.
    clock:
        Returns the current Unix time in seconds; used for download names.
    """

    def __init__(
        self,
        backend: SpeechBackend,
        host: AudioHost,
        notifier: Notifier | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.backend = backend
        self.host = host
        self.notifier = notifier or LoggingNotifier()
        self.clock = clock

        self.text = ""
        self.voice = DEFAULT_VOICE
        self.model = DEFAULT_MODEL

        self.state = FormState.IDLE
        self.audio_handle: Any = None
        self.last_error: str | None = None
        self._audio: bytes | None = None
        self._audio_inputs: tuple[str, str, str] | None = None

    # -- derived state ------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self.state is FormState.LOADING

    @property
    def is_finalized(self) -> bool:
        return self.state is FormState.FINALIZED

    @property
    def remaining_characters(self) -> int:
        return MAX_TEXT_LENGTH - len(self.text)

    @property
    def can_submit(self) -> bool:
        return (
            not self.is_loading
            and bool(self.text.strip())
            and len(self.text) <= MAX_TEXT_LENGTH
        )

    @property
    def can_finalize(self) -> bool:
        return self.state is FormState.PREVIEWED

    @property
    def can_download(self) -> bool:
        return self.state is FormState.FINALIZED

    @property
    def is_stale(self) -> bool:
        """True when the held audio was made from different inputs."""
        if self._audio_inputs is None:
            return False
        return self._audio_inputs != (self.text, self.voice, self.model)

    @property
    def submit_label(self) -> str:
        if self.is_loading:
            return "Generating Preview..."
        if self.state is FormState.PREVIEWED:
            return "Regenerate Preview"
        return "Generate Preview"

    # -- input editing ------------------------------------------------------

    def set_text(self, text: str) -> bool:
        return self._edit("text", text)

    def set_voice(self, voice: str) -> bool:
        return self._edit("voice", voice)

    def set_model(self, model: str) -> bool:
        return self._edit("model", model)

    def _edit(self, name: str, value: str) -> bool:
        if self.is_loading:
            return False
        if getattr(self, name) == value:
            return True
        setattr(self, name, value)
        # Finalization applies to the inputs that produced the audio.
        if self.state is FormState.FINALIZED:
            self._transition(FormState.PREVIEWED)
        return True

    # -- workflow -----------------------------------------------------------

    def preview(self) -> bool:
        """Request a new preview for the current inputs.

        Returns ``True`` when a new preview is held afterwards.
        """
        if self.is_loading:
            return False
        if not self.text.strip():
            self.notifier.error(MSG_EMPTY_TEXT)
            return False
        if len(self.text) > MAX_TEXT_LENGTH:
            self.notifier.error(MSG_TOO_LONG)
            return False

        self._transition(FormState.LOADING)
        self.last_error = None
        self._release_audio()

        text, voice, model = self.text, self.voice, self.model
        try:
            audio = self.backend.synthesize(text, voice, model)
            self.audio_handle = self.host.create_playable_handle(audio)
        except SpeechClientError as exc:
            self.last_error = exc.message or MSG_FAILED
            self._transition(FormState.IDLE)
            self.notifier.error(self.last_error)
            return False
        except Exception:
            self._transition(FormState.IDLE)
            raise

        self._audio = audio
        self._audio_inputs = (text, voice, model)
        self._transition(FormState.PREVIEWED)
        self.notifier.success(MSG_PREVIEW_READY)
        return True

    regenerate = preview

    def finalize(self) -> bool:
        """Mark the current preview final.  No network call is made."""
        if self.state is not FormState.PREVIEWED:
            return False
        self._transition(FormState.FINALIZED)
        self.notifier.success(MSG_FINALIZED)
        return True

    def download(self) -> str | None:
        """Save the finalized audio and return the generated filename."""
        if self.state is not FormState.FINALIZED or self._audio is None:
            return None
        filename = f"speech-{int(self.clock() * 1000)}.mp3"
        self.host.persist(self._audio, filename)
        self.notifier.success(MSG_DOWNLOADED)
        return filename

    def close(self) -> None:
        """End the session, releasing any held audio."""
        self._release_audio()
        self._transition(FormState.IDLE)

    def __enter__(self) -> FormController:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- internals ----------------------------------------------------------

    def _release_audio(self) -> None:
        if self.audio_handle is not None:
            self.host.release(self.audio_handle)
        self.audio_handle = None
        self._audio = None
        self._audio_inputs = None

    def _transition(self, new_state: FormState) -> None:
        if new_state is not self.state:
            logger.debug("Form state %s -> %s", self.state.value, new_state.value)
        self.state = new_state

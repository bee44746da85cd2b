"""speech_preview -- preview, finalize and download provider-synthesized speech.

Public API re-exports for convenient access::

    from speech_preview import FormController, SpeechClient, SpeechSynthesizer
"""

from ._version import __version__
from .client import SpeechClient
from .exceptions import (
    ConfigurationError,
    ProviderError,
    SpeechClientError,
    SpeechPreviewError,
    SynthesisValidationError,
    UnexpectedError,
)
from .form import (
    AudioHost,
    FormController,
    FormState,
    LoggingNotifier,
    Notifier,
    RecordingNotifier,
    SpeechBackend,
)
from .hosts import DirectoryHost
from .models import (
    DEFAULT_MODEL,
    DEFAULT_VOICE,
    MAX_TEXT_LENGTH,
    MODELS,
    VOICES,
    SynthesisRequest,
    SynthesisResult,
)
from .synthesizer import SpeechSynthesizer
from .validator import (
    SynthesisValidator,
    ValidationIssue,
    ValidationResult,
    parse_synthesis_request,
)

__all__ = [
    "__version__",
    # Models
    "SynthesisRequest",
    "SynthesisResult",
    "VOICES",
    "MODELS",
    "DEFAULT_VOICE",
    "DEFAULT_MODEL",
    "MAX_TEXT_LENGTH",
    # Server side
    "SynthesisValidator",
    "ValidationIssue",
    "ValidationResult",
    "parse_synthesis_request",
    "SpeechSynthesizer",
    # Client side
    "SpeechClient",
    "FormController",
    "FormState",
    "SpeechBackend",
    "AudioHost",
    "Notifier",
    "LoggingNotifier",
    "RecordingNotifier",
    "DirectoryHost",
    # Exceptions
    "SpeechPreviewError",
    "ConfigurationError",
    "SynthesisValidationError",
    "ProviderError",
    "UnexpectedError",
    "SpeechClientError",
]

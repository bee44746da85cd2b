"""Custom exception hierarchy for the speech_preview package."""


class SpeechPreviewError(Exception):
    """Base exception for all speech_preview errors."""


class ConfigurationError(SpeechPreviewError):
    """Raised when the provider credential (or other required setting) is missing."""


class SynthesisValidationError(SpeechPreviewError):
    """Raised when a synthesis request body violates a field constraint."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


class ProviderError(SpeechPreviewError):
    """Raised when the speech-synthesis provider reports a failure.

    ``status_code`` is the provider's HTTP status, passed through verbatim.
    """

    def __init__(self, message: str, status_code: int) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class UnexpectedError(SpeechPreviewError):
    """Raised for failures that carry no detail safe to show the caller."""


class SpeechClientError(SpeechPreviewError):
    """Raised by the proxy client when a synthesis round trip fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)

"""Synthesis request validator -- turns a decoded JSON body into a request.

Checks run in order and stop at the first failure:

  R1  Body is a JSON object
  R2  ``text`` is present, a string, and non-empty
  R3  ``text`` is at most 4096 characters (Unicode code points)
  R4  ``voice`` (default "alloy" when absent) is one of the six provider voices
  R5  ``model`` (default "tts-1" when absent) is one of the two provider models

The credential check happens before any of these and lives with the
endpoint, since a missing key is a configuration problem rather than a
problem with the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .exceptions import SynthesisValidationError
from .models import (
    DEFAULT_MODEL,
    DEFAULT_VOICE,
    MAX_TEXT_LENGTH,
    MODELS,
    VOICES,
    SynthesisRequest,
)

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationIssue:
    """The first constraint a request body violated."""

    rule: str
    field: str | None
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a request body.

    Exactly one of ``request`` and ``issue`` is set.
    """

    request: SynthesisRequest | None = None
    issue: ValidationIssue | None = None

    @property
    def valid(self) -> bool:
        return self.issue is None


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class SynthesisValidator:
    """Validate decoded request bodies against the provider's constraints."""

    def __init__(self, max_text_length: int = MAX_TEXT_LENGTH) -> None:
        self.max_text_length = max_text_length

    def check(self, body: Any) -> ValidationResult:
        """Validate *body*, returning a result instead of raising."""
        if not isinstance(body, dict):
            return self._fail("R1", None, "Request body must be a JSON object")

        text = body.get("text")
        if not text or not isinstance(text, str):
            return self._fail("R2", "text", "Text is required and must be a string")

        if len(text) > self.max_text_length:
            return self._fail(
                "R3",
                "text",
                f"Text exceeds maximum length of {self.max_text_length} characters",
            )

        # Defaults apply only to absent keys; an explicit null is invalid.
        voice = body.get("voice", DEFAULT_VOICE)
        if voice not in VOICES:
            return self._fail(
                "R4", "voice", f"Invalid voice. Must be one of: {', '.join(VOICES)}"
            )

        model = body.get("model", DEFAULT_MODEL)
        if model not in MODELS:
            return self._fail(
                "R5", "model", f"Invalid model. Must be one of: {', '.join(MODELS)}"
            )

        return ValidationResult(request=SynthesisRequest(text=text, voice=voice, model=model))

    def validate(self, body: Any) -> SynthesisRequest:
        """Validate *body* and return the typed request.

        Raises
        ------
        SynthesisValidationError
            Naming the first violated constraint.
        """
        result = self.check(body)
        if result.issue is not None:
            raise SynthesisValidationError(result.issue.message, field=result.issue.field)
        if result.request is None:
            raise SynthesisValidationError("Request body could not be validated")
        return result.request

    @staticmethod
    def _fail(rule: str, field: str | None, message: str) -> ValidationResult:
        return ValidationResult(issue=ValidationIssue(rule=rule, field=field, message=message))


def parse_synthesis_request(body: Any) -> SynthesisRequest:
    """Module-level shortcut for ``SynthesisValidator().validate(body)``."""
    return SynthesisValidator().validate(body)

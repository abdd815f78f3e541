"""
Exception types for Gen-Form.

Every failure raised by the generation pipeline derives from GenFormError,
so the HTTP boundary can catch the whole family in one place.
"""

from typing import Any


class GenFormError(Exception):
    """Base class for Gen-Form failures."""


class ConfigurationError(GenFormError):
    """No credential (or no model list) is configured. Raised before any network call."""


class ValidationError(GenFormError):
    """Prompt shape or generated schema shape is invalid."""


class PromptValidationError(ValidationError):
    """The user prompt was rejected before generation."""


class SchemaValidationError(ValidationError):
    """A recovered object violates the minimal form schema invariants."""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


class ProviderFailure(GenFormError):
    """The generation provider failed (network, quota, availability, auth)."""

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code is not None:
            return f"{self.message} (status {self.code})"
        return self.message


class ParseError(GenFormError):
    """Model output could not be turned into a structured object."""


class UnrecoverableParseError(ParseError):
    """All repair strategies failed. Carries diagnostic context about the input."""

    def __init__(self, message: str, length: int, head: str, tail: str):
        super().__init__(message)
        self.length = length
        self.head = head
        self.tail = tail


class AggregateGenerationFailure(GenFormError):
    """Every model in the fallback order failed with a retryable error."""

    def __init__(self, last_error: BaseException | None, attempts: list[Any] | None = None):
        last_message = str(last_error) if last_error is not None else "no models attempted"
        super().__init__(f"All models failed. Last error: {last_message}")
        self.last_error = last_error
        self.attempts = attempts or []

"""Tests for failure classification."""

import pytest

from gen_form.errors import (
    ParseError,
    ProviderFailure,
    SchemaValidationError,
    UnrecoverableParseError,
)
from gen_form.generation.classifier import FailureKind, classify, is_retryable


def _parse_error(message: str) -> UnrecoverableParseError:
    return UnrecoverableParseError(message, length=10, head="", tail="")


class _StatusError(Exception):
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class TestTransientFailures:
    """Capacity failures move on to the next model."""

    @pytest.mark.parametrize("message", [
        "Quota exceeded for quota metric 'Generate Content API requests per minute'",
        "Rate limit reached for requests",
        "429 Too Many Requests",
        "RESOURCE EXHAUSTED",
        "Resource has been exhausted (e.g. check quota).",
        "Service Unavailable",
        "The model is overloaded. Temporarily unavailable.",
    ])
    def test_message_signals(self, message):
        """Test that capacity messages are retryable regardless of code."""
        failure = ProviderFailure(message)
        assert classify(failure) is FailureKind.TRANSIENT
        assert is_retryable(failure)

    @pytest.mark.parametrize("code", [429, 503, 509])
    def test_status_codes(self, code):
        """Test that capacity status codes are retryable regardless of message."""
        assert is_retryable(ProviderFailure("upstream said no", code=code))

    def test_status_code_attribute(self):
        """Test that status_code is read from foreign exceptions."""
        assert is_retryable(_StatusError("nope", status_code=503))

    def test_plain_exception_with_capacity_message(self):
        """Test that message matching applies to any exception type."""
        assert is_retryable(RuntimeError("Too many requests, slow down"))


class TestMalformedOutput:
    """Parse failures signal a model-specific problem."""

    @pytest.mark.parametrize("message", [
        "Failed to parse AI response: Expecting value: line 1 column 1 (char 0)",
        "Unterminated string starting at: line 3 column 14 (char 52)",
        "Unexpected end of JSON input",
    ])
    def test_parse_failures_are_retryable(self, message):
        """Test that malformed-output parse errors are retryable."""
        failure = _parse_error(message)
        assert classify(failure) is FailureKind.MALFORMED_OUTPUT
        assert is_retryable(failure)

    def test_base_parse_error(self):
        """Test that the ParseError base class is covered too."""
        assert classify(ParseError("unexpected end of data")) is FailureKind.MALFORMED_OUTPUT

    def test_parse_error_without_signal_is_fatal(self):
        """Test that a parse error with no malformed-JSON signal is fatal."""
        assert classify(ParseError("Response was not JSON")) is FailureKind.FATAL

    def test_malformed_signal_ignored_outside_parse_errors(self):
        """Test that only parse failures are judged on malformed-JSON signals."""
        failure = RuntimeError("unterminated string in config file")
        assert classify(failure) is FailureKind.FATAL
        assert not is_retryable(failure)


class TestContentAndFatalFailures:
    """Failures no other model will fix."""

    def test_schema_validation_is_content(self):
        """Test that schema violations are never retried."""
        failure = SchemaValidationError("Invalid form schema: fields array is empty")
        assert classify(failure) is FailureKind.CONTENT
        assert not is_retryable(failure)

    def test_schema_validation_wins_over_message(self):
        """Test that the content axis is independent of message text."""
        failure = SchemaValidationError("Invalid form schema: failed to parse rate limit")
        assert classify(failure) is FailureKind.CONTENT

    @pytest.mark.parametrize("failure", [
        ProviderFailure("API key not valid. Please pass a valid API key.", code=400),
        ProviderFailure("Unauthorized", code=401),
        ProviderFailure("Permission denied", code=403),
        ProviderFailure("Connection error."),
        ValueError("something unexpected"),
    ])
    def test_fatal(self, failure):
        """Test that auth, bad request and unclassified failures are fatal."""
        assert classify(failure) is FailureKind.FATAL
        assert not is_retryable(failure)

    def test_boolean_code_is_ignored(self):
        """Test that a boolean code attribute is not mistaken for a status."""
        failure = ProviderFailure("odd", code=None)
        failure.code = True
        assert not is_retryable(failure)

"""
Failure classification for model fallback.

Two independent questions are asked of every failure:

- is the *model* at fault (capacity, truncated or malformed output)?
  Another model may succeed, so the orchestrator moves on.
- is the *content* at fault (schema shape violations)? No model variant
  will fix that, so it is never retried.

Anything not recognised (authentication, bad request, unknown) is fatal.
"""

from enum import Enum

from gen_form.errors import ParseError, SchemaValidationError


class FailureKind(str, Enum):
    """Classification of a generation failure."""

    TRANSIENT = "transient"
    MALFORMED_OUTPUT = "malformed_output"
    CONTENT = "content"
    FATAL = "fatal"


# Capacity signals, matched against the lower-cased message
TRANSIENT_MESSAGE_SIGNALS = (
    "quota exceeded",
    "rate limit",
    "too many requests",
    "resource exhausted",
    "resource_exhausted",
    "resource has been exhausted",
    "service unavailable",
    "temporarily unavailable",
)

TRANSIENT_STATUS_CODES = frozenset({429, 503, 509})

# Only honoured for parse failures
MALFORMED_OUTPUT_SIGNALS = (
    "failed to parse",
    "unterminated string",
    "unexpected end",
)

RETRYABLE_KINDS = frozenset({FailureKind.TRANSIENT, FailureKind.MALFORMED_OUTPUT})


def _failure_message(failure: BaseException) -> str:
    message = getattr(failure, "message", None)
    if not isinstance(message, str) or not message:
        message = str(failure)
    return message.lower()


def _failure_code(failure: BaseException) -> int | None:
    for attr in ("code", "status_code", "status"):
        value = getattr(failure, attr, None)
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)
    return None


def is_transient(failure: BaseException) -> bool:
    """Capacity/availability failure that is specific to one model."""
    if _failure_code(failure) in TRANSIENT_STATUS_CODES:
        return True
    message = _failure_message(failure)
    return any(signal in message for signal in TRANSIENT_MESSAGE_SIGNALS)


def is_malformed_output(failure: BaseException) -> bool:
    """Parse failure that suggests the model truncated or garbled its output."""
    if not isinstance(failure, ParseError):
        return False
    message = _failure_message(failure)
    return any(signal in message for signal in MALFORMED_OUTPUT_SIGNALS)


def classify(failure: BaseException) -> FailureKind:
    """Place a failure on one of the classification axes."""
    if isinstance(failure, SchemaValidationError):
        return FailureKind.CONTENT
    if is_transient(failure):
        return FailureKind.TRANSIENT
    if is_malformed_output(failure):
        return FailureKind.MALFORMED_OUTPUT
    return FailureKind.FATAL


def is_retryable(failure: BaseException) -> bool:
    """Whether the orchestrator should try the next model after this failure."""
    return classify(failure) in RETRYABLE_KINDS

"""
Recovery of structured objects from raw model output.

Model output is often wrapped in markdown fences or cut off at the output
token ceiling. The repairer tries, in order:

1. direct parse of the fence-stripped text
2. closing every delimiter left open by truncation
3. cutting back to the last complete array element and closing from there

and reports the direct-parse error if none of them works.
"""

import json
import logging
import re
from typing import Any

from gen_form.errors import UnrecoverableParseError

logger = logging.getLogger("gen-form")

DIAGNOSTIC_CONTEXT_CHARS = 500

_LEADING_FENCE = re.compile(r"^```[a-zA-Z]*[ \t]*\r?\n?")
_TRAILING_FENCE = re.compile(r"\r?\n?```\s*$")

_CLOSER_FOR = {"{": "}", "[": "]"}
_OPENER_FOR = {"}": "{", "]": "["}

# Boundary after the last fully-formed object inside an array
_ELEMENT_BOUNDARY = "},"


def normalize(raw_text: str) -> str:
    """Strip a surrounding markdown code fence and whitespace."""
    text = raw_text.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def open_delimiters(text: str) -> list[str]:
    """
    Return the stack of unclosed '{' / '[' delimiters, outermost first.

    Delimiters inside string literals are ignored. A closer that does not
    match the innermost opener is skipped; the parse attempt will report it.
    """
    stack: list[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _CLOSER_FOR:
            stack.append(ch)
        elif ch in _OPENER_FOR:
            if stack and stack[-1] == _OPENER_FOR[ch]:
                stack.pop()
    return stack


def close_open_delimiters(text: str) -> str:
    """Append the closers for every delimiter left open, innermost first."""
    stack = open_delimiters(text)
    return text + "".join(_CLOSER_FOR[opener] for opener in reversed(stack))


def _looks_truncated(text: str) -> bool:
    return not text.endswith("}") or bool(open_delimiters(text))


class ResponseRepairer:
    """Best-effort JSON recovery for truncated or fenced model output."""

    def repair(self, raw_text: str) -> Any:
        """
        Parse raw model output into a Python object.

        Args:
            raw_text: Text returned by the model.

        Returns:
            The parsed JSON value.

        Raises:
            UnrecoverableParseError: If no strategy produced valid JSON. The
                message carries the direct-parse error, not the repair errors.
        """
        text = normalize(raw_text)

        try:
            return json.loads(text)
        except json.JSONDecodeError as initial_error:
            logger.warning(f"Initial JSON parse failed ({initial_error}), attempting repair...")
            repaired = self._try_repairs(text)
            if repaired is not None:
                return repaired[0]
            self._log_diagnostics(raw_text, initial_error)
            raise UnrecoverableParseError(
                f"Failed to parse AI response: {initial_error}",
                length=len(raw_text),
                head=raw_text[:DIAGNOSTIC_CONTEXT_CHARS],
                tail=raw_text[-DIAGNOSTIC_CONTEXT_CHARS:],
            ) from initial_error

    def _try_repairs(self, text: str) -> tuple[Any] | None:
        """Run the repair strategies; wraps a success in a 1-tuple so JSON null survives."""
        if not text:
            return None

        if _looks_truncated(text):
            logger.warning("Detected truncated response, closing open delimiters...")
            try:
                result = json.loads(close_open_delimiters(text))
                logger.info("Successfully repaired truncated JSON")
                return (result,)
            except json.JSONDecodeError:
                logger.warning("Delimiter repair failed, truncating at last complete element...")

        boundary = text.rfind(_ELEMENT_BOUNDARY)
        if boundary > -1:
            truncated = text[: boundary + 1]
            try:
                result = json.loads(close_open_delimiters(truncated))
                logger.info("Successfully parsed by truncating to last complete element")
                return (result,)
            except json.JSONDecodeError:
                pass

        return None

    @staticmethod
    def _log_diagnostics(raw_text: str, error: Exception) -> None:
        logger.error(f"JSON parse error: {error}")
        logger.error(f"Received text length: {len(raw_text)}")
        logger.error(f"First {DIAGNOSTIC_CONTEXT_CHARS} chars: {raw_text[:DIAGNOSTIC_CONTEXT_CHARS]}")
        logger.error(f"Last {DIAGNOSTIC_CONTEXT_CHARS} chars: {raw_text[-DIAGNOSTIC_CONTEXT_CHARS:]}")

"""
Input guardrails for Gen-Form.

These guardrails validate the user prompt before any model is called.
"""

import re
from typing import Any

from pydantic import BaseModel, Field

from gen_form.config import get_config
from gen_form.errors import PromptValidationError
from gen_form.guardrails.constants import SUSPICIOUS_PATTERNS


class PromptCheckResult(BaseModel):
    """Result of the prompt safety/shape check."""

    is_valid: bool = Field(..., description="Whether the prompt may be sent to a model")
    issues: list[str] = Field(default_factory=list, description="Any issues found")

    @property
    def error(self) -> str | None:
        return self.issues[0] if self.issues else None


def _check_for_injection(text: str) -> bool:
    """Check for potential injection patterns."""
    for pattern in SUSPICIOUS_PATTERNS:
        if re.search(pattern, text, re.IGNORECASE):
            return False
    return True


def check_prompt(
    prompt: Any,
    min_length: int | None = None,
    max_length: int | None = None,
    injection_check: bool | None = None,
) -> PromptCheckResult:
    """
    Validate a user prompt.

    Checks for:
    1. A string value
    2. Trimmed length within bounds
    3. No injection patterns (when enabled)

    Unset arguments fall back to the current configuration.
    """
    config = get_config()
    min_length = config.min_prompt_length if min_length is None else min_length
    max_length = config.max_prompt_length if max_length is None else max_length
    if injection_check is None:
        injection_check = config.enable_injection_check

    if not prompt or not isinstance(prompt, str):
        return PromptCheckResult(
            is_valid=False,
            issues=["Prompt is required and must be a string"],
        )

    issues = []
    text = prompt.strip()

    if len(text) < min_length:
        issues.append("Prompt is too short. Please provide a more detailed description.")
    elif len(text) > max_length:
        issues.append(f"Prompt is too long. Please keep it under {max_length} characters.")

    if injection_check and not _check_for_injection(text):
        issues.append("Potentially unsafe content detected")

    return PromptCheckResult(is_valid=len(issues) == 0, issues=issues)


def ensure_valid_prompt(prompt: Any, **kwargs) -> str:
    """Return the prompt unchanged, or raise PromptValidationError."""
    result = check_prompt(prompt, **kwargs)
    if not result.is_valid:
        raise PromptValidationError(result.error)
    return prompt

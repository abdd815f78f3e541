"""
Guardrails for Gen-Form.

Prompt checks before generation, advisory schema checks after it.
"""

from gen_form.guardrails.input_guardrails import (
    PromptCheckResult,
    check_prompt,
    ensure_valid_prompt,
)
from gen_form.guardrails.output_guardrails import (
    SchemaInspection,
    inspect_schema,
)

__all__ = [
    "PromptCheckResult",
    "check_prompt",
    "ensure_valid_prompt",
    "SchemaInspection",
    "inspect_schema",
]

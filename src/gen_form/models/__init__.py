"""
Data models for Gen-Form.

This module contains Pydantic models for:
- The generated form schema
- Attempt history of a fallback run
- HTTP request/response envelopes
"""

from gen_form.models.form_schema import (
    BUTTON_STYLES,
    CHOICE_FIELD_TYPES,
    FIELD_TYPES,
    VALIDATION_TYPES,
    FormField,
    FormSchema,
    SubmitButton,
    ValidationRule,
)
from gen_form.models.attempts import (
    AttemptRecord,
    GenerationResult,
)
from gen_form.models.api_models import (
    ErrorResponse,
    GenerateFormRequest,
    GenerateFormResponse,
    ResponseMeta,
)

__all__ = [
    # Form schema
    "FormSchema",
    "FormField",
    "SubmitButton",
    "ValidationRule",
    "FIELD_TYPES",
    "CHOICE_FIELD_TYPES",
    "VALIDATION_TYPES",
    "BUTTON_STYLES",
    # Attempts
    "AttemptRecord",
    "GenerationResult",
    # HTTP envelopes
    "GenerateFormRequest",
    "GenerateFormResponse",
    "ResponseMeta",
    "ErrorResponse",
]

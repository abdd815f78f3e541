"""
Output guardrails for Gen-Form.

These checks inspect a validated schema and report problems the renderer
will likely trip over. They never reject a schema; the structural
validator has already decided that.
"""

from pydantic import BaseModel, Field

from gen_form.guardrails.constants import MAX_FIELD_NAME_LENGTH, VALID_FIELD_NAME
from gen_form.models.form_schema import (
    BUTTON_STYLES,
    CHOICE_FIELD_TYPES,
    FIELD_TYPES,
    VALIDATION_TYPES,
    FormSchema,
    SubmitButton,
    ValidationRule,
)


class SchemaInspection(BaseModel):
    """Advisory findings about a generated schema."""

    warnings: list[str] = Field(default_factory=list, description="List of warnings")

    @property
    def is_clean(self) -> bool:
        return not self.warnings


def _check_field_name(name: str) -> tuple[bool, str | None]:
    """Validate a field name."""
    if len(name) > MAX_FIELD_NAME_LENGTH:
        return False, "Field name too long"
    if not VALID_FIELD_NAME.match(name):
        return False, "Invalid characters in field name"
    return True, None


def inspect_schema(schema: FormSchema) -> SchemaInspection:
    """
    Inspect a generated schema for renderer-level problems.

    Reports:
    1. Duplicate field names
    2. Names that are not identifier-safe
    3. Unknown field types and choice fields without options
    4. Unknown or malformed validation rules
    5. Unknown style or malformed submit button
    """
    warnings = []
    seen: set[str] = set()

    for index, field in enumerate(schema.fields):
        if field.name in seen:
            warnings.append(f"Duplicate field name '{field.name}' at index {index}")
        seen.add(field.name)

        is_valid, error = _check_field_name(field.name)
        if not is_valid:
            warnings.append(f"Field '{field.name}': {error}")

        if field.type not in FIELD_TYPES:
            warnings.append(f"Field '{field.name}' has unknown type: {field.type}")
        elif field.is_choice and not field.options:
            warnings.append(f"Field '{field.name}' of type {field.type} has no options")

        if field.validations is not None and not isinstance(field.validations, list):
            warnings.append(f"Field '{field.name}' has malformed validations")
        for rule in field.validations if isinstance(field.validations, list) else []:
            if not isinstance(rule, ValidationRule):
                warnings.append(f"Field '{field.name}' has a malformed validation rule")
            elif rule.type not in VALIDATION_TYPES:
                warnings.append(f"Field '{field.name}' has unknown validation type: {rule.type}")

    button = schema.submit_button
    if button is not None and not isinstance(button, SubmitButton):
        warnings.append("Submit button is malformed")
    elif button is not None and button.style not in BUTTON_STYLES:
        warnings.append(f"Submit button has unknown style: {button.style}")

    return SchemaInspection(warnings=warnings)

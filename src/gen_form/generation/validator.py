"""
Structural validation of recovered form objects.

Only the invariants the renderer cannot work without are enforced here:
an object with a non-empty list of fields, each carrying a name, a label
and a type. Enum values, property shapes and cross-field rules are left
to consumers.
"""

from collections.abc import Mapping
from typing import Any

from gen_form.errors import SchemaValidationError
from gen_form.models.form_schema import FormSchema

REQUIRED_FIELD_KEYS = ("name", "label", "type")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return not value


class SchemaValidator:
    """Checks a parsed object and turns it into an immutable FormSchema."""

    def validate(self, obj: Any) -> FormSchema:
        if not isinstance(obj, Mapping):
            raise SchemaValidationError("Invalid form schema: not an object")

        fields = obj.get("fields")
        if fields is None or not isinstance(fields, list):
            raise SchemaValidationError("Invalid form schema: fields array is missing")

        if len(fields) == 0:
            raise SchemaValidationError("Invalid form schema: fields array is empty")

        for index, field in enumerate(fields):
            if not isinstance(field, Mapping) or any(
                _is_blank(field.get(key)) for key in REQUIRED_FIELD_KEYS
            ):
                raise SchemaValidationError(
                    f"Invalid field at index {index}: missing required properties (name, label, type)",
                    index=index,
                )

        # The schema models accept any value for the remaining properties
        return FormSchema.model_validate({**obj, "fields": [dict(field) for field in fields]})

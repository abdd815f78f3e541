"""
Form schema models.

These models represent the structured form description produced by the
generation pipeline, in the shape consumed by the client-side renderer
(camelCase keys on the wire).
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


FIELD_TYPES = frozenset({
    "text", "email", "password", "number", "tel", "url",
    "textarea", "select", "radio", "checkbox", "date", "time",
})

# Field types that render a list of options
CHOICE_FIELD_TYPES = frozenset({"select", "radio", "checkbox"})

VALIDATION_TYPES = frozenset({
    "required", "email", "minLength", "maxLength", "min", "max", "pattern",
})

BUTTON_STYLES = frozenset({"primary", "secondary", "success"})


def _as_text(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def _scalar_as_text(value: Any) -> Any:
    if isinstance(value, (bool, int, float)):
        return str(value)
    return value


# Models answer with numbers or booleans where text is expected; keep them as text
Text = Annotated[str, BeforeValidator(_as_text)]
Option = Annotated[str, BeforeValidator(_scalar_as_text)]


class _SchemaModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
    )


def _lenient(**kwargs: Any) -> Any:
    """Field whose value is kept as given when it does not fit the declared shape."""
    return Field(default=None, union_mode="left_to_right", **kwargs)


class ValidationRule(_SchemaModel):
    """A single client-side validation rule."""

    type: Text = Field(..., description="required, email, minLength, maxLength, min, max, pattern")
    value: Any = Field(default=None, description="Rule argument")
    message: Text | None = Field(default=None, description="User-facing error message")


# A rule that does not fit ValidationRule is kept as given
Rule = Annotated[ValidationRule | Any, Field(union_mode="left_to_right")]


class FormField(_SchemaModel):
    """Schema for a single form field."""

    name: Text = Field(..., description="Control identifier, unique within the form")
    label: Text = Field(..., description="Human-readable label")
    type: Text = Field(..., description="Input type: text, email, select, ...")
    placeholder: Text | None = Field(default=None, description="Placeholder text")
    required: bool | Any = _lenient(description="Whether field is required")
    default_value: Any = Field(default=None, alias="defaultValue", description="Initial control value")
    options: list[Option] | Any = _lenient(description="Choices for select/radio/checkbox")
    validations: list[Rule] | Any = _lenient(description="Validation rules")
    hint: Text | None = Field(default=None, description="Help text")

    @property
    def is_choice(self) -> bool:
        return self.type in CHOICE_FIELD_TYPES


class SubmitButton(_SchemaModel):
    """Submit button configuration."""

    text: Text = Field(default="Submit", description="Button text")
    style: Text = Field(default="primary", description="primary, secondary or success")


class FormSchema(_SchemaModel):
    """
    Complete generated form schema.

    Instances are frozen: once the validator has produced one, nothing in
    the pipeline mutates it.
    """

    form_type: Text | None = Field(default=None, alias="formType", description="registration, login, contact, ...")
    title: Text | None = Field(default=None, description="Form title")
    description: Text | None = Field(default=None, description="Form description")
    fields: list[FormField] = Field(..., description="Ordered list of form fields")
    submit_button: SubmitButton | Any = _lenient(alias="submitButton")

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> FormField | None:
        """Look up a field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def to_dict(self) -> dict[str, Any]:
        """Export in the renderer's camelCase wire format."""
        return self.model_dump(by_alias=True, exclude_none=True)

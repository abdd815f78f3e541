"""
Request and response models for the HTTP boundary.

The core never sees these: the boundary parses a GenerateFormRequest,
calls the orchestrator, and wraps the result in one of the responses below.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from gen_form.models.form_schema import FormSchema


class GenerateFormRequest(BaseModel):
    """Body of POST /api/generate-form."""

    prompt: Any = Field(default=None, description="Free-text description of the form to build")


class ResponseMeta(BaseModel):
    """Metadata attached to a successful generation."""

    model_config = ConfigDict(populate_by_name=True)

    fields_count: int = Field(..., alias="fieldsCount")
    generated_at: str = Field(..., alias="generatedAt", description="ISO-8601 timestamp")
    model: str | None = Field(default=None, description="Model that produced the schema")


class GenerateFormResponse(BaseModel):
    """Successful generation response."""

    success: bool = True
    data: dict[str, Any]
    meta: ResponseMeta

    @classmethod
    def from_schema(cls, schema: FormSchema, model: str | None = None) -> "GenerateFormResponse":
        return cls(
            data=schema.to_dict(),
            meta=ResponseMeta(
                fields_count=len(schema.fields),
                generated_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
                model=model,
            ),
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ErrorResponse(BaseModel):
    """Failure response."""

    success: bool = False
    error: str
    details: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

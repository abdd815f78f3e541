"""
Attempt history models.

One AttemptRecord is produced per model invocation during a fallback run.
"""

from pydantic import BaseModel, ConfigDict, Field

from gen_form.models.form_schema import FormSchema


class AttemptRecord(BaseModel):
    """Outcome of invoking a single model."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(..., description="Model identifier that was invoked")
    succeeded: bool = Field(..., description="Whether this attempt produced a valid schema")
    error: str | None = Field(default=None, description="Failure message, if any")
    error_kind: str | None = Field(default=None, description="Failure classification")
    retryable: bool | None = Field(default=None, description="Whether the failure allowed fallback")
    duration_s: float = Field(default=0.0, description="Wall time of the attempt in seconds")


class GenerationResult(BaseModel):
    """A validated schema together with how it was obtained."""

    model_config = ConfigDict(frozen=True)

    form_schema: FormSchema = Field(..., description="Validated form schema")
    model: str = Field(..., description="Model that produced the schema")
    attempts: list[AttemptRecord] = Field(default_factory=list)

    @property
    def fallback_count(self) -> int:
        """Number of models tried before the successful one."""
        return max(len(self.attempts) - 1, 0)

"""
Gen-Form: Form schemas from free-text prompts.

Describe a form in plain language, get back a structured form schema.
Model outages, rate limits and truncated output are absorbed by falling
back through an ordered list of models and repairing broken JSON.

Simple Usage:
    from gen_form import generate_form_schema

    schema = await generate_form_schema("A job application form with CV upload link")

    print(schema.title)
    print(schema.to_dict())

Advanced Usage:
    from gen_form import ModelFallbackOrchestrator, setup_tracing

    setup_tracing(console=True, file_path="traces.jsonl")
    orchestrator = ModelFallbackOrchestrator(
        models=["gemini-2.5-flash-lite", "gemini-2.5-pro"],
    )

    result = await orchestrator.run("Event registration with dietary preferences")
    print(result.model, result.fallback_count)

HTTP Server:
    gen-form-server --port 3000
    curl -X POST localhost:3000/api/generate-form -d '{"prompt": "Contact form"}'
"""

from gen_form.orchestrator import (
    ModelFallbackOrchestrator,
    generate_form_schema,
    is_configured,
)
from gen_form.errors import (
    AggregateGenerationFailure,
    ConfigurationError,
    GenFormError,
    ParseError,
    PromptValidationError,
    ProviderFailure,
    SchemaValidationError,
    UnrecoverableParseError,
    ValidationError,
)
from gen_form.models.form_schema import (
    FormField,
    FormSchema,
    SubmitButton,
    ValidationRule,
)
from gen_form.models.attempts import (
    AttemptRecord,
    GenerationResult,
)
from gen_form.generation import (
    FailureKind,
    ResponseRepairer,
    SchemaValidator,
    classify,
    is_retryable,
)
from gen_form.tracing import (
    setup_tracing,
    configure_tracing,
    disable_tracing,
    enable_tracing,
)

__all__ = [
    # Main interface
    "ModelFallbackOrchestrator",
    "generate_form_schema",
    "is_configured",
    # Schema models
    "FormSchema",
    "FormField",
    "SubmitButton",
    "ValidationRule",
    "AttemptRecord",
    "GenerationResult",
    # Pipeline components
    "FailureKind",
    "classify",
    "is_retryable",
    "ResponseRepairer",
    "SchemaValidator",
    # Errors
    "GenFormError",
    "ConfigurationError",
    "ValidationError",
    "PromptValidationError",
    "SchemaValidationError",
    "ProviderFailure",
    "ParseError",
    "UnrecoverableParseError",
    "AggregateGenerationFailure",
    # Tracing
    "setup_tracing",
    "configure_tracing",
    "disable_tracing",
    "enable_tracing",
]

__version__ = "0.1.0"

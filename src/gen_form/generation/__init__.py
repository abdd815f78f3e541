"""
Resilient generation pipeline components.

This module contains:
- Failure classification (retry with another model or stop)
- Repair of malformed/truncated JSON output
- Structural validation of recovered schemas
- The prompt template and the model provider
"""

from gen_form.generation.classifier import (
    FailureKind,
    classify,
    is_retryable,
)
from gen_form.generation.repair import (
    ResponseRepairer,
)
from gen_form.generation.validator import (
    SchemaValidator,
)
from gen_form.generation.prompts import (
    FORM_GENERATION_PROMPT,
    build_generation_prompt,
)
from gen_form.generation.provider import (
    AgentsGenerationProvider,
    GenerationProvider,
)

__all__ = [
    "FailureKind",
    "classify",
    "is_retryable",
    "ResponseRepairer",
    "SchemaValidator",
    "FORM_GENERATION_PROMPT",
    "build_generation_prompt",
    "AgentsGenerationProvider",
    "GenerationProvider",
]

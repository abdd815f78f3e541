"""
Model Fallback Orchestrator.

This is the main entry point for Gen-Form. Give it a free-text prompt,
get back a validated form schema.

Models are tried one at a time in the configured order. A failure that is
specific to one model (capacity, truncated output) moves on to the next
one; anything else stops the run and propagates unchanged.
"""

import logging
import time

from gen_form.config import GenFormConfig, get_config
from gen_form.errors import AggregateGenerationFailure, ConfigurationError
from gen_form.generation.classifier import RETRYABLE_KINDS, classify
from gen_form.generation.prompts import build_generation_prompt
from gen_form.generation.provider import AgentsGenerationProvider, GenerationProvider
from gen_form.generation.repair import ResponseRepairer
from gen_form.generation.validator import SchemaValidator
from gen_form.guardrails.output_guardrails import inspect_schema
from gen_form.models.attempts import AttemptRecord, GenerationResult
from gen_form.models.form_schema import FormSchema
from gen_form.tracing import configure_tracing, trace_form_generation

logger = logging.getLogger("gen-form")

NOT_CONFIGURED_MESSAGE = (
    "No Google API key configured. Please set one of: GEMINI_API_KEY, GOOGLE_API_KEY, "
    "API_KEY, GCLOUD_API_KEY, or GOOGLE_APIKEY in your environment variables or .env file.\n"
    "Get your API key from: https://aistudio.google.com/app/apikey"
)


class ModelFallbackOrchestrator:
    """
    Generates form schemas with ordered multi-model fallback.

    Usage:
        orchestrator = ModelFallbackOrchestrator()

        schema = await orchestrator.generate("A contact form with name, email and message")
        print(schema.to_dict())

        # Or, to see which model answered and what failed before it
        result = await orchestrator.run("A job application form")
        print(result.model, result.attempts)
    """

    def __init__(
        self,
        models: list[str] | None = None,
        provider: GenerationProvider | None = None,
        repairer: ResponseRepairer | None = None,
        validator: SchemaValidator | None = None,
        config: GenFormConfig | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            models: Model identifiers in priority order. If None, uses
                config.model_fallback_order.
            provider: Generation backend. If None, uses AgentsGenerationProvider.
            repairer: JSON recovery strategy. If None, uses ResponseRepairer.
            validator: Structural validator. If None, uses SchemaValidator.
            config: Configuration. If None, uses the global configuration.
                Its tracing settings apply unless tracing was already set up.
        """
        config = config or get_config()
        self.models = list(models if models is not None else config.model_fallback_order)
        self.model_settings = config.get_model_settings()
        self.provider = provider or AgentsGenerationProvider(config)
        self.repairer = repairer or ResponseRepairer()
        self.validator = validator or SchemaValidator()

        configure_tracing(config)

    async def generate(self, prompt: str) -> FormSchema:
        """
        Generate a form schema from a free-text prompt.

        Raises:
            AggregateGenerationFailure: Every model failed with a retryable error.
            GenFormError: The first fatal failure, unchanged.
        """
        result = await self.run(prompt)
        return result.form_schema

    @trace_form_generation
    async def run(self, prompt: str) -> GenerationResult:
        """Generate a schema and report which model produced it and what failed first."""
        if not self.models:
            raise ConfigurationError("No models configured for form generation")

        full_prompt = build_generation_prompt(prompt)
        attempts: list[AttemptRecord] = []
        last_error: Exception | None = None

        for position, model in enumerate(self.models):
            logger.info(f"Trying model: {model}{' (fallback)' if position > 0 else ''}")
            started = time.monotonic()

            try:
                schema = await self._attempt(model, full_prompt)
            except Exception as e:
                kind = classify(e)
                retryable = kind in RETRYABLE_KINDS
                attempts.append(AttemptRecord(
                    model=model,
                    succeeded=False,
                    error=str(e),
                    error_kind=kind.value,
                    retryable=retryable,
                    duration_s=time.monotonic() - started,
                ))

                if not retryable:
                    logger.error(f"Non-retryable {kind.value} error with {model}: {e}")
                    raise

                last_error = e
                logger.warning(f"Model {model} failed, retrying with next model due to: {str(e)[:100]}")
                continue

            attempts.append(AttemptRecord(
                model=model,
                succeeded=True,
                duration_s=time.monotonic() - started,
            ))
            logger.info(f"Successfully generated form with model: {model} ({len(schema.fields)} fields)")

            for warning in inspect_schema(schema).warnings:
                logger.warning(f"Schema warning: {warning}")

            return GenerationResult(form_schema=schema, model=model, attempts=attempts)

        logger.error(f"All {len(self.models)} models failed")
        raise AggregateGenerationFailure(last_error, attempts)

    async def _attempt(self, model: str, full_prompt: str) -> FormSchema:
        """Invoke one model and turn its output into a validated schema."""
        raw_text = await self.provider.invoke(model, full_prompt, self.model_settings)
        parsed = self.repairer.repair(raw_text)
        return self.validator.validate(parsed)


def is_configured() -> bool:
    """Whether a provider credential is present. Never touches the network."""
    return get_config().is_configured()


async def generate_form_schema(
    prompt: str,
    config: GenFormConfig | None = None,
    provider: GenerationProvider | None = None,
) -> FormSchema:
    """
    Convenience function to generate a form schema.

    Args:
        prompt: Free-text description of the form.
        config: Configuration. If None, uses the global configuration.
        provider: Generation backend. If None, uses AgentsGenerationProvider.

    Returns:
        FormSchema

    Raises:
        ConfigurationError: No credential configured (checked before any network call).

    Example:
        >>> from gen_form import generate_form_schema
        >>> schema = await generate_form_schema("Newsletter signup with name and email")
    """
    config = config or get_config()
    if not config.is_configured():
        raise ConfigurationError(NOT_CONFIGURED_MESSAGE)

    orchestrator = ModelFallbackOrchestrator(config=config, provider=provider)
    return await orchestrator.generate(prompt)

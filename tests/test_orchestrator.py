"""Tests for the model fallback orchestrator."""

import json

import pytest

from gen_form.config import GenFormConfig
from gen_form.errors import (
    AggregateGenerationFailure,
    ConfigurationError,
    ProviderFailure,
    SchemaValidationError,
    ValidationError,
)
from gen_form.generation.prompts import FORM_GENERATION_PROMPT
from gen_form.orchestrator import ModelFallbackOrchestrator, generate_form_schema
from gen_form import tracing as tracing_module
from tests.fixtures.scripted_provider import schema_json


def _orchestrator(config, provider) -> ModelFallbackOrchestrator:
    return ModelFallbackOrchestrator(config=config, provider=provider)


class TestFirstSuccessWins:
    """Successful generation paths."""

    @pytest.mark.asyncio
    async def test_first_model_succeeds(self, test_config, make_provider, models):
        provider = make_provider(schema_json())
        orchestrator = _orchestrator(test_config, provider)

        result = await orchestrator.run("A contact form with name, email and message")

        assert provider.models_called == models[:1]
        assert result.model == models[0]
        assert result.form_schema.field_names == ["fullName", "email", "message"]
        assert result.fallback_count == 0

    @pytest.mark.asyncio
    async def test_composed_prompt_and_settings(self, test_config, make_provider):
        provider = make_provider(schema_json())
        orchestrator = _orchestrator(test_config, provider)

        await orchestrator.generate("Newsletter signup")

        call = provider.calls[0]
        assert call.prompt == f"{FORM_GENERATION_PROMPT}\n\nUser Request: Newsletter signup"
        assert call.settings.temperature == 0.7
        assert call.settings.top_p == 0.8
        assert call.settings.max_tokens == 2048
        assert call.settings.extra_body == {"top_k": 40}

    @pytest.mark.asyncio
    async def test_same_settings_for_every_model(self, test_config, make_provider):
        provider = make_provider(
            ProviderFailure("Rate limit exceeded", code=429),
            schema_json(),
        )
        await _orchestrator(test_config, provider).generate("Feedback form")

        assert provider.calls[0].settings == provider.calls[1].settings

    @pytest.mark.asyncio
    async def test_truncated_output_is_repaired(self, test_config, make_provider):
        raw = '{"title":"Contact","fields":[{"name":"email","label":"Email","type":"email"}'
        provider = make_provider(raw)

        schema = await _orchestrator(test_config, provider).generate("Contact form")

        assert schema.field_names == ["email"]
        assert provider.models_called == [test_config.model_fallback_order[0]]

    @pytest.mark.asyncio
    async def test_numeric_options_accepted_by_first_model(self, test_config, make_provider):
        raw = json.dumps({
            "title": "Rate us",
            "fields": [{"name": "rating", "label": "Rating", "type": "select", "options": [1, 2, 3, 4, 5]}],
        })
        provider = make_provider(raw)

        schema = await _orchestrator(test_config, provider).generate("Rating form")

        assert schema.fields[0].options == ["1", "2", "3", "4", "5"]
        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_explicit_model_order(self, test_config, make_provider):
        provider = make_provider(ProviderFailure("Service Unavailable", code=503), schema_json())
        orchestrator = ModelFallbackOrchestrator(
            models=["custom-cheap", "custom-capable"],
            config=test_config,
            provider=provider,
        )

        result = await orchestrator.run("Booking form")

        assert provider.models_called == ["custom-cheap", "custom-capable"]
        assert result.model == "custom-capable"


class TestFallback:
    """Retryable failures move on to the next model."""

    @pytest.mark.asyncio
    async def test_fallback_order_is_fixed(self, test_config, make_provider, models):
        provider = make_provider(
            ProviderFailure("Quota exceeded", code=429),
            ProviderFailure("Service Unavailable", code=503),
            "not json at all",
            ProviderFailure("Resource has been exhausted"),
            schema_json(),
        )

        result = await _orchestrator(test_config, provider).run("Survey form")

        assert provider.models_called == models
        assert result.model == models[4]
        assert [a.succeeded for a in result.attempts] == [False, False, False, False, True]
        assert result.attempts[2].error_kind == "malformed_output"
        assert result.fallback_count == 4

    @pytest.mark.asyncio
    async def test_all_models_rate_limited(self, test_config, make_provider, models):
        """Every model returns a rate-limit failure."""
        provider = make_provider(
            *[ProviderFailure(f"Rate limit exceeded on attempt {i}", code=429) for i in range(1, 6)]
        )

        with pytest.raises(AggregateGenerationFailure) as exc_info:
            await generate_form_schema("Contact form", config=test_config, provider=provider)

        error = exc_info.value
        assert "Rate limit exceeded on attempt 5" in str(error)
        assert str(error).startswith("All models failed. Last error:")
        assert isinstance(error.last_error, ProviderFailure)
        assert len(error.attempts) == 5
        assert provider.models_called == models

    @pytest.mark.asyncio
    async def test_parse_failures_exhaust_list(self, test_config, make_provider):
        provider = make_provider(*(["Sorry, I cannot do that."] * 5))

        with pytest.raises(AggregateGenerationFailure, match="Failed to parse AI response"):
            await _orchestrator(test_config, provider).generate("Order form")

        assert len(provider.calls) == 5


class TestFatalFailures:
    """Fatal failures stop immediately without touching later models."""

    @pytest.mark.asyncio
    async def test_authentication_error(self, test_config, make_provider, models):
        auth_error = ProviderFailure("API key not valid. Please pass a valid API key.", code=400)
        provider = make_provider(auth_error, schema_json())

        with pytest.raises(ProviderFailure) as exc_info:
            await _orchestrator(test_config, provider).generate("Login form")

        assert exc_info.value is auth_error
        assert provider.models_called == models[:1]

    @pytest.mark.asyncio
    async def test_empty_fields_is_not_retried(self, test_config, make_provider):
        """Valid JSON with no fields is a content error, not a model error."""
        provider = make_provider(schema_json(fields=[]), schema_json())

        with pytest.raises(SchemaValidationError, match="fields array is empty") as exc_info:
            await _orchestrator(test_config, provider).generate("Empty form")

        assert isinstance(exc_info.value, ValidationError)
        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_fatal_after_retryable(self, test_config, make_provider, models):
        provider = make_provider(
            ProviderFailure("Too many requests", code=429),
            ProviderFailure("Permission denied", code=403),
            schema_json(),
        )

        with pytest.raises(ProviderFailure, match="Permission denied"):
            await _orchestrator(test_config, provider).generate("Payment form")

        assert provider.models_called == models[:2]

    @pytest.mark.asyncio
    async def test_unclassified_exception_propagates_unchanged(self, test_config, make_provider):
        provider = make_provider(RuntimeError("boom"), schema_json())

        with pytest.raises(RuntimeError, match="boom"):
            await _orchestrator(test_config, provider).generate("Any form")

        assert len(provider.calls) == 1


class TestConfiguration:
    """Configuration problems surface before any model call."""

    @pytest.mark.asyncio
    async def test_missing_api_key(self, make_provider, models):
        provider = make_provider(schema_json())
        config = GenFormConfig(api_key="", model_fallback_order=models)

        with pytest.raises(ConfigurationError, match="No Google API key configured"):
            await generate_form_schema("Contact form", config=config, provider=provider)

        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_empty_model_list(self, test_config, make_provider):
        provider = make_provider(schema_json())
        orchestrator = ModelFallbackOrchestrator(
            models=[], config=test_config, provider=provider
        )

        with pytest.raises(ConfigurationError):
            await orchestrator.generate("Contact form")

        assert provider.calls == []


class TestTracing:
    """A generation run is recorded as one trace."""

    @pytest.fixture
    def untouched_tracing(self, monkeypatch):
        monkeypatch.setattr(tracing_module, "_configured", False)
        yield
        tracing_module.setup_tracing(enabled=False)

    def _traced_config(self, test_config, trace_file) -> GenFormConfig:
        test_config.enable_tracing = True
        test_config.trace_to_console = False
        test_config.trace_file = str(trace_file)
        return test_config

    @pytest.mark.asyncio
    async def test_trace_written_to_configured_file(self, untouched_tracing, test_config, make_provider, tmp_path):
        trace_file = tmp_path / "traces.jsonl"
        config = self._traced_config(test_config, trace_file)

        await _orchestrator(config, make_provider(schema_json())).generate("Contact form")

        assert '"name": "form_generation"' in trace_file.read_text()

    @pytest.mark.asyncio
    async def test_configured_once_per_process(self, untouched_tracing, test_config, make_provider, tmp_path):
        """A later orchestrator does not reset tracing set up by an earlier one."""
        trace_file = tmp_path / "traces.jsonl"
        _orchestrator(self._traced_config(test_config, trace_file), make_provider())

        untraced = GenFormConfig(api_key="test-key", enable_tracing=False)
        await _orchestrator(untraced, make_provider(schema_json())).generate("Contact form")

        assert len(trace_file.read_text().splitlines()) == 1

    def test_default_exporter_always_replaced(self, untouched_tracing, monkeypatch):
        installed = []
        monkeypatch.setattr(tracing_module, "set_trace_processors", installed.append)

        tracing_module.setup_tracing(enabled=True, console=False)

        assert installed == [[]]

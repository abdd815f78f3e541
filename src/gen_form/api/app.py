"""
HTTP boundary for Gen-Form.

Routes:
    POST /api/generate-form   {"prompt": "..."} -> generated form schema
    GET  /health              service status

Prompt-shape problems are rejected here with 400 before the core is
called. Every failure from the core becomes a 500 with the message
attached as "details".
"""

import json
import logging

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from gen_form.config import GenFormConfig, get_config
from gen_form.generation.provider import GenerationProvider
from gen_form.guardrails.input_guardrails import check_prompt
from gen_form.models.api_models import (
    ErrorResponse,
    GenerateFormRequest,
    GenerateFormResponse,
)
from gen_form.orchestrator import ModelFallbackOrchestrator
from gen_form.tracing import setup_tracing

logger = logging.getLogger("gen-form")


def _error(message: str, status: int, details: str | None = None) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message, details=details).to_payload(), status_code=status)


def create_app(
    config: GenFormConfig | None = None,
    provider: GenerationProvider | None = None,
) -> Starlette:
    """
    Create the Starlette app.

    Args:
        config: Configuration. If None, uses the global configuration.
        provider: Generation backend handed to the orchestrator.

    Tracing is configured here, once for the process, from the config.
    """
    config = config or get_config()
    setup_tracing(
        enabled=config.enable_tracing,
        console=config.trace_to_console,
        file_path=config.trace_file,
    )
    orchestrator = ModelFallbackOrchestrator(config=config, provider=provider)

    async def generate_form(request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _error("Request body must be valid JSON", 400)

        if not isinstance(body, dict):
            body = {}
        form_request = GenerateFormRequest.model_validate(body)

        check = check_prompt(
            form_request.prompt,
            min_length=config.min_prompt_length,
            max_length=config.max_prompt_length,
            injection_check=config.enable_injection_check,
        )
        if not check.is_valid:
            return _error(check.error, 400)

        if not config.is_configured():
            return _error("API key not configured. Please set API_KEY in .env file", 500)

        try:
            result = await orchestrator.run(form_request.prompt)
        except Exception as e:
            logger.exception(f"Error in generate-form handler: {e}")
            return _error("Failed to generate form", 500, details=str(e))

        response = GenerateFormResponse.from_schema(result.form_schema, model=result.model)
        return JSONResponse(response.to_payload())

    async def health_check(request: Request) -> JSONResponse:
        return JSONResponse({
            "status": "healthy",
            "service": "gen-form",
            "configured": config.is_configured(),
            "models": orchestrator.models,
        })

    return Starlette(
        routes=[
            Route("/api/generate-form", generate_form, methods=["POST"]),
            Route("/health", health_check, methods=["GET"]),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["*"],
                allow_headers=["*"],
            ),
        ],
    )

"""
Configuration module for Gen-Form.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv
from agents import ModelSettings

# Load environment variables
load_dotenv()


# Checked in order, first non-empty wins
API_KEY_ENV_VARS = (
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "API_KEY",
    "GCLOUD_API_KEY",
    "GOOGLE_APIKEY",
)

# Cheapest/fastest first, most capable last
DEFAULT_MODEL_FALLBACK_ORDER = [
    "gemini-2.5-flash-lite",
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-2.0-flash-lite",
    "gemini-2.5-pro",
]


def _read_api_key() -> str:
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


def _parse_model_list(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    models = [m.strip() for m in raw.split(",") if m.strip()]
    return models or None


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default).lower()).lower() == "true"


@dataclass
class GenFormConfig:
    """Configuration settings for Gen-Form."""

    # Provider settings (Gemini through its OpenAI-compatible endpoint)
    api_key: str = ""
    base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    model_fallback_order: list[str] = field(
        default_factory=lambda: list(DEFAULT_MODEL_FALLBACK_ORDER)
    )

    # Sampling settings, identical for every model in the fallback order
    temperature: float = 0.7
    top_p: float = 0.8
    top_k: int | None = 40
    max_output_tokens: int = 2048

    # Retries inside the HTTP client for one model; fallback moves to the next model instead
    max_client_retries: int = 0

    # HTTP server settings
    server_host: str = "0.0.0.0"
    server_port: int = 3000

    # Guardrail settings
    min_prompt_length: int = 5
    max_prompt_length: int = 4000
    enable_injection_check: bool = True

    # Tracing / logging
    enable_tracing: bool = False
    trace_to_console: bool = True
    trace_file: str | None = None
    log_level: str = "INFO"

    def get_model_settings(self) -> ModelSettings:
        """Get ModelSettings instance with the shared sampling configuration."""
        extra_body = {"top_k": self.top_k} if self.top_k is not None else None
        return ModelSettings(
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=self.max_output_tokens,
            extra_body=extra_body,
        )

    def is_configured(self) -> bool:
        """Whether a provider credential is present. Never touches the network."""
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "GenFormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()
        top_k_raw = os.getenv("GEN_FORM_TOP_K", str(_defaults.top_k or ""))

        return cls(
            api_key=_read_api_key(),
            base_url=os.getenv("GEN_FORM_BASE_URL", _defaults.base_url),
            model_fallback_order=(
                _parse_model_list(os.getenv("GEN_FORM_MODELS"))
                or _defaults.model_fallback_order
            ),
            temperature=float(os.getenv("GEN_FORM_TEMPERATURE", str(_defaults.temperature))),
            top_p=float(os.getenv("GEN_FORM_TOP_P", str(_defaults.top_p))),
            top_k=int(top_k_raw) if top_k_raw else None,
            max_output_tokens=int(os.getenv("GEN_FORM_MAX_OUTPUT_TOKENS", str(_defaults.max_output_tokens))),
            max_client_retries=int(os.getenv("GEN_FORM_MAX_CLIENT_RETRIES", str(_defaults.max_client_retries))),
            server_host=os.getenv("HOST", _defaults.server_host),
            server_port=int(os.getenv("PORT", str(_defaults.server_port))),
            min_prompt_length=int(os.getenv("GEN_FORM_MIN_PROMPT_LENGTH", str(_defaults.min_prompt_length))),
            max_prompt_length=int(os.getenv("GEN_FORM_MAX_PROMPT_LENGTH", str(_defaults.max_prompt_length))),
            enable_injection_check=_env_flag("GEN_FORM_ENABLE_INJECTION_CHECK", _defaults.enable_injection_check),
            enable_tracing=_env_flag("GEN_FORM_ENABLE_TRACING", _defaults.enable_tracing),
            trace_to_console=_env_flag("GEN_FORM_TRACE_TO_CONSOLE", _defaults.trace_to_console),
            trace_file=os.getenv("GEN_FORM_TRACE_FILE") or None,
            log_level=os.getenv("GEN_FORM_LOG_LEVEL", _defaults.log_level).upper(),
        )


config = GenFormConfig.from_env()


def get_config() -> GenFormConfig:
    """Get the current configuration."""
    return config


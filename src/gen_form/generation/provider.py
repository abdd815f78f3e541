"""
Generation provider.

The orchestrator only needs one capability from a model backend: turn a
model identifier, a prompt and sampling settings into raw text, or raise
ProviderFailure. The default implementation runs a one-shot agent from the
OpenAI Agents SDK against Gemini's OpenAI-compatible endpoint.
"""

from typing import Protocol

import openai
from openai import AsyncOpenAI
from agents import Agent, ModelSettings, OpenAIChatCompletionsModel, Runner

from gen_form.config import GenFormConfig, get_config
from gen_form.errors import ConfigurationError, ProviderFailure


class GenerationProvider(Protocol):
    """Anything that can turn a prompt into raw model text."""

    async def invoke(
        self,
        model: str,
        prompt: str,
        settings: ModelSettings,
    ) -> str:
        ...


class AgentsGenerationProvider:
    """
    Provider backed by the OpenAI Agents SDK.

    Each call builds a throwaway Agent bound to the requested model, so no
    state is carried between invocations. The AsyncOpenAI client is shared;
    its timeout applies to every call. Client-side retries are off by default
    (config.max_client_retries) so a failing model hands over to the next one
    straight away.
    """

    def __init__(
        self,
        config: GenFormConfig | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self._config = config or get_config()
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self._config.is_configured():
                raise ConfigurationError("No API key configured for the generation provider")
            self._client = AsyncOpenAI(
                api_key=self._config.api_key,
                base_url=self._config.base_url,
                max_retries=self._config.max_client_retries,
            )
        return self._client

    def create_agent(self, model: str, settings: ModelSettings) -> Agent[None]:
        """Create a plain-text agent bound to one model."""
        return Agent[None](
            name=f"Form Generator ({model})",
            model=OpenAIChatCompletionsModel(
                model=model,
                openai_client=self._get_client(),
            ),
            model_settings=settings,
        )

    async def invoke(
        self,
        model: str,
        prompt: str,
        settings: ModelSettings,
    ) -> str:
        """
        Run the prompt against one model.

        Raises:
            ProviderFailure: On any API error.
        """
        agent = self.create_agent(model, settings)
        try:
            result = await Runner.run(agent, prompt)
        except openai.APIStatusError as e:
            raise ProviderFailure(e.message, code=e.status_code) from e
        except openai.APIError as e:
            raise ProviderFailure(e.message) from e

        # Empty output is left to the repairer, which reports it as a parse failure
        text = result.final_output
        if text is None:
            return ""
        return text if isinstance(text, str) else str(text)

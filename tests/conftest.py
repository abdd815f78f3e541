"""Shared pytest fixtures."""

import pytest

from gen_form.config import GenFormConfig
from tests.fixtures.scripted_provider import ScriptedProvider

MODELS = [
    "gemini-2.5-flash-lite",
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-2.0-flash-lite",
    "gemini-2.5-pro",
]


@pytest.fixture
def models() -> list[str]:
    return list(MODELS)


@pytest.fixture
def test_config() -> GenFormConfig:
    return GenFormConfig(api_key="test-key", model_fallback_order=list(MODELS))


@pytest.fixture
def make_provider():
    def _make(*outcomes):
        return ScriptedProvider(list(outcomes))
    return _make

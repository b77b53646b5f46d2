"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
Providers are replaced with scripted fakes so no test touches the network.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from skillpath.exceptions import ProviderError  # noqa: E402
from skillpath.providers import BaseProvider, CompletionAdapter, GenerationPolicy, ProviderId  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


# ========================================
# Fake Providers
# ========================================


class ScriptedProvider(BaseProvider):
    """
    Provider that replays scripted responses in order.

    Each entry is returned as text, or raised when it is an exception. When
    the script runs out, ``default`` is used (or a ProviderError is raised).
    """

    def __init__(self, provider_id, models, responses=None, default=None):
        self.provider_id = provider_id
        super().__init__(models)
        self.responses = list(responses or [])
        self.default = default
        self.calls = []
        self.closed = False

    async def generate(self, model, prompt, *, temperature, max_output_tokens):
        self.calls.append((model, prompt))
        if self.responses:
            item = self.responses.pop(0)
        elif self.default is not None:
            item = self.default
        else:
            item = ProviderError("no scripted response", provider=self.provider_id.value, model=model)

        if isinstance(item, Exception):
            raise item
        return item

    async def aclose(self):
        self.closed = True


@pytest.fixture
def policy():
    """Generation policy with no delay between retries."""
    return GenerationPolicy(retry_delay=0)


@pytest.fixture
def make_adapter(policy):
    """
    Factory for an adapter over two scripted provider families.

    Usage:
        adapter = make_adapter(groq=["{...}"], gemini_default=ProviderError("down"))
        adapter.providers[ProviderId.GROQ].calls
    """

    def _make(groq=None, gemini=None, groq_default=None, gemini_default=None):
        providers = [
            ScriptedProvider(ProviderId.GROQ, ["fast-large", "fast-small"], groq, groq_default),
            ScriptedProvider(ProviderId.GEMINI, ["gemini-flash"], gemini, gemini_default),
        ]
        return CompletionAdapter(providers, policy)

    return _make


@pytest.fixture
def failing_adapter(make_adapter):
    """Adapter whose every model fails."""
    return make_adapter()


@pytest.fixture
def garbage_adapter(make_adapter):
    """Adapter whose every model returns unparsable text."""
    return make_adapter(groq_default="Sorry, I cannot help with that.", gemini_default="still not json")

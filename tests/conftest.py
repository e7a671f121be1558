"""
Shared fixtures for client tests.

No network: every Session is routed to a StubAdapter (see stubs.py).
"""

import pytest
import requests

from openrouter_client import ClientConfig, OpenRouterClient
from stubs import BASE_URL, FixedRandom


@pytest.fixture
def session_with():
    """Factory: a Session whose HTTP(S) traffic goes to the given adapter."""
    def _make(adapter):
        session = requests.Session()
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session
    return _make


@pytest.fixture
def make_config(session_with):
    """Factory: a ClientConfig wired to the given adapter."""
    def _make(adapter, **overrides):
        values = {
            "api_key": "sk-or-test",
            "base_url": BASE_URL,
            "http_referer": "https://example.com",
            "x_title": "Test App",
            "session": session_with(adapter),
            "initial_backoff": 0.0,
        }
        values.update(overrides)
        return ClientConfig(**values)
    return _make


@pytest.fixture
def make_client(make_config):
    """Factory: an OpenRouterClient wired to the given adapter."""
    def _make(adapter, supports_model=None, **overrides):
        config = make_config(adapter, **overrides)
        return OpenRouterClient(config, supports_model=supports_model, rng=FixedRandom())
    return _make

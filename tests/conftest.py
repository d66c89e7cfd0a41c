"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Fake providers (no network, configurable content/failure/delay)
- A fresh AIMonitor per test
- Test client (FastAPI TestClient) wired to fake providers
"""

import asyncio
from typing import Callable, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.deps import get_aggregator, get_monitor
from app.ai.consensus import ResponseAggregator
from app.ai.monitoring import AIMonitor
from app.ai.providers.base import AIProvider, AIResponse, ErrorKind, ProviderType, TokenUsage


# ---------------------------------------------------------------------------
# FAKE PROVIDER
# ---------------------------------------------------------------------------

class FakeProvider(AIProvider):
    """
    In-memory provider for tests.

    Records every prompt it receives and whether it was cancelled while
    "waiting on the network" (sleeping for `delay` seconds).
    """

    def __init__(
        self,
        provider_type: ProviderType,
        content: str = "",
        error: Optional[str] = None,
        error_kind: ErrorKind = ErrorKind.TRANSPORT,
        delay: float = 0.0,
        model: str = "fake-model",
    ):
        self.provider_type = provider_type
        self.content = content
        self.error = error
        self.error_kind = error_kind
        self.delay = delay
        self.model = model
        self.api_key = "fake-key"
        self.calls: List[str] = []
        self.cancelled = False

    async def generate(self, prompt: str, **kwargs) -> AIResponse:
        self.calls.append(prompt)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise

        if self.error:
            return self._create_error_response(self.error, self.model, kind=self.error_kind)

        return AIResponse(
            content=self.content,
            provider=self.provider_type,
            model=self.model,
            usage=TokenUsage(prompt_tokens=4, completion_tokens=6),
            latency_ms=1.0,
        )


# ---------------------------------------------------------------------------
# PROVIDER / AGGREGATOR FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_provider() -> Callable[..., FakeProvider]:
    """Factory for FakeProvider instances."""
    return FakeProvider


@pytest.fixture
def monitor() -> AIMonitor:
    """A fresh monitor so tests never share metrics."""
    return AIMonitor()


@pytest.fixture
def agreeing_providers() -> List[FakeProvider]:
    """Three providers where OpenAI and Gemini agree and Cohere is the outlier."""
    return [
        FakeProvider(ProviderType.OPENAI, content="the cat sat"),
        FakeProvider(ProviderType.GEMINI, content="the cat sat"),
        FakeProvider(ProviderType.COHERE, content="a dog ran"),
    ]


# ---------------------------------------------------------------------------
# HTTP FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def providers(agreeing_providers: List[FakeProvider]) -> List[FakeProvider]:
    """Providers behind the test client; override in a test module to change them."""
    return agreeing_providers


@pytest.fixture
def client(providers: List[FakeProvider], monitor: AIMonitor) -> Generator[TestClient, None, None]:
    """
    Create a test client whose aggregator talks to fake providers.

    Uses sequential fan-out so provider call order is deterministic.
    """
    aggregator = ResponseAggregator(providers=providers, concurrent=False, timeout=5, monitor=monitor)

    app.dependency_overrides[get_aggregator] = lambda: aggregator
    app.dependency_overrides[get_monitor] = lambda: monitor

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()

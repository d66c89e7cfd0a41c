"""
Tests for the /engineer-prompt HTTP surface.

The aggregator behind the router talks to fake providers (see conftest),
so these tests cover status codes and body shapes only.
"""

import pytest

from app.ai.providers.base import ErrorKind, ProviderType


class TestEngineerPrompt:
    """Tests for POST /engineer-prompt."""

    def test_returns_all_responses_and_consensus(self, client, providers):
        response = client.post("/engineer-prompt", json={"input": "describe a cat"})

        assert response.status_code == 200
        assert response.json() == {
            "openai_response": "the cat sat",
            "gemini_response": "the cat sat",
            "cohere_response": "a dog ran",
            "best_response": "the cat sat",
        }
        assert all(p.calls == ["describe a cat"] for p in providers)

    def test_extra_fields_are_ignored(self, client):
        response = client.post("/engineer-prompt", json={"input": "hi", "verbose": True})

        assert response.status_code == 200

    @pytest.mark.parametrize("body", [
        {},
        {"input": ""},
        {"input": 42},
        {"text": "wrong field"},
    ])
    def test_bad_body_is_400(self, client, providers, body):
        response = client.post("/engineer-prompt", json=body)

        assert response.status_code == 400
        assert "detail" in response.json()
        assert all(p.calls == [] for p in providers)

    def test_invalid_json_is_400(self, client, providers):
        response = client.post(
            "/engineer-prompt",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert all(p.calls == [] for p in providers)


class TestEngineerPromptFailures:
    """Provider failures map to a generic 500."""

    @pytest.fixture
    def providers(self, fake_provider):
        return [
            fake_provider(ProviderType.OPENAI, content="ok"),
            fake_provider(ProviderType.GEMINI, error="quota exceeded for project 1234"),
            fake_provider(ProviderType.COHERE, content="ok"),
        ]

    def test_failure_names_provider_without_upstream_detail(self, client, providers):
        response = client.post("/engineer-prompt", json={"input": "hello"})

        assert response.status_code == 500
        assert response.json() == {"detail": "failed to get response from Gemini"}
        assert "quota" not in response.text
        assert providers[2].calls == []


class TestConfigurationFailure:
    """A missing key fails like any other provider error."""

    @pytest.fixture
    def providers(self, fake_provider):
        return [
            fake_provider(
                ProviderType.OPENAI,
                error="OpenAI API key not configured",
                error_kind=ErrorKind.CONFIGURATION,
            ),
            fake_provider(ProviderType.GEMINI, content="ok"),
            fake_provider(ProviderType.COHERE, content="ok"),
        ]

    def test_missing_key_is_500(self, client):
        response = client.post("/engineer-prompt", json={"input": "hello"})

        assert response.status_code == 500
        assert response.json()["detail"] == "failed to get response from OpenAI"


class TestStatsAndHealth:
    """Tests for /engineer-prompt/stats and /health."""

    def test_stats_start_empty(self, client):
        response = client.get("/engineer-prompt/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["total_requests"] == 0
        assert data["success_rate"] == "0.0%"

    def test_stats_after_a_request(self, client):
        client.post("/engineer-prompt", json={"input": "describe a cat"})

        data = client.get("/engineer-prompt/stats").json()

        assert data["total_requests"] == 3
        assert data["successful_requests"] == 3
        assert data["requests_by_provider"] == {"openai": 1, "gemini": 1, "cohere": 1}
        assert data["consensus_wins_by_provider"] == {"openai": 1}
        assert data["prompt_tokens"] == 12
        assert data["completion_tokens"] == 18
        assert data["tokens_by_provider"] == {"openai": 10, "gemini": 10, "cohere": 10}

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

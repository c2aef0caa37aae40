"""
Tests for the HTTP API: /chat, /providers and /health.
"""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.llm.fallback import TOPIC_RESPONSES
from app.services.llm.orchestrator import get_orchestrator
from app.services.llm.registry import get_registry

from conftest import ALL_PROVIDERS, FakeProvider, auth_failure, make_orchestrator


@pytest.fixture
def client_for():
    """Build a TestClient wired to an orchestrator with fake adapters."""

    def _build(available=(), fakes=None):
        orchestrator, fakes = make_orchestrator(available=available, fakes=fakes)
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        app.dependency_overrides[get_registry] = lambda: orchestrator.registry
        return TestClient(app), fakes

    yield _build
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self) -> None:
        response = TestClient(app).get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestProvidersRoute:
    def test_none_available(self, client_for) -> None:
        client, _ = client_for(available=())

        response = client.get("/providers")

        assert response.status_code == 200
        data = response.json()
        assert data["any_available"] is False
        assert data["available_count"] == 0
        assert [p["name"] for p in data["providers"]] == list(ALL_PROVIDERS)

    def test_some_available(self, client_for) -> None:
        client, _ = client_for(available=("gemini", "cohere"))

        data = client.get("/providers").json()

        assert data["any_available"] is True
        assert data["available_count"] == 2
        assert {p["name"]: p["available"] for p in data["providers"]} == {
            "openai": False,
            "gemini": True,
            "claude": False,
            "cohere": True,
        }
        assert "g-test" not in str(data)


class TestChatRoute:
    def test_fallback_when_nothing_configured(self, client_for) -> None:
        client, fakes = client_for(available=())

        response = client.post(
            "/chat",
            json={"messages": [{"role": "user", "content": "What about Iran and Israel?"}]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data == {
            "text": TOPIC_RESPONSES[0][1],
            "provider_name": "fallback",
            "was_fallback": True,
        }
        assert all(f.calls == [] for f in fakes.values())

    def test_provider_answer(self, client_for) -> None:
        client, _ = client_for(available=("claude",))

        data = client.post(
            "/chat", json={"messages": [{"role": "user", "content": "hello"}]}
        ).json()

        assert data["provider_name"] == "claude"
        assert data["was_fallback"] is False
        assert data["text"] == "answer from claude"

    def test_ui_label_preference(self, client_for) -> None:
        client, fakes = client_for(available=ALL_PROVIDERS)

        data = client.post(
            "/chat",
            json={
                "messages": [{"role": "user", "content": "hello"}],
                "preferred_provider": "Gemini",
            },
        ).json()

        assert data["provider_name"] == "gemini"
        assert fakes["openai"].calls == []

    def test_unknown_preference_ignored(self, client_for) -> None:
        client, _ = client_for(available=("openai",))

        data = client.post(
            "/chat",
            json={
                "messages": [{"role": "user", "content": "hello"}],
                "preferred_provider": "Mistral",
            },
        ).json()

        assert data["provider_name"] == "openai"

    def test_provider_outage_is_not_an_http_error(self, client_for) -> None:
        fakes = {"openai": FakeProvider("openai", [auth_failure("openai")])}
        client, _ = client_for(available=("openai",), fakes=fakes)

        response = client.post(
            "/chat", json={"messages": [{"role": "user", "content": "Russia?"}]}
        )

        assert response.status_code == 200
        assert response.json()["was_fallback"] is True
        assert response.json()["text"] == TOPIC_RESPONSES[2][1]

    def test_error_messages_not_forwarded(self, client_for) -> None:
        client, fakes = client_for(available=("openai",))

        client.post(
            "/chat",
            json={
                "messages": [
                    {"role": "user", "content": "q1"},
                    {"role": "assistant", "content": "technical difficulties", "is_error": True},
                    {"role": "user", "content": "q2"},
                ]
            },
        )

        sent = fakes["openai"].calls[0]["messages"]
        assert [m.content for m in sent] == ["q1", "q2"]

    def test_empty_messages_rejected(self, client_for) -> None:
        client, _ = client_for(available=())

        response = client.post("/chat", json={"messages": []})

        assert response.status_code == 422

    def test_invalid_role_rejected(self, client_for) -> None:
        client, _ = client_for(available=())

        response = client.post(
            "/chat", json={"messages": [{"role": "tool", "content": "x"}]}
        )

        assert response.status_code == 422

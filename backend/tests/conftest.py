"""
Shared fixtures for backend tests.
"""

import pytest

from app.core.config import Settings
from app.services.llm.base import (
    FailureKind,
    LLMProvider,
    ProviderFailure,
    ProviderResult,
    ProviderSuccess,
)
from app.services.llm.models import ConversationMessage
from app.services.llm.orchestrator import LLMOrchestrator
from app.services.llm.registry import ProviderRegistry, build_provider_configs


ALL_PROVIDERS = ("openai", "gemini", "claude", "cohere")


class FakeProvider(LLMProvider):
    """Scripted provider that records every call it receives."""

    def __init__(self, name: str, results: list[ProviderResult] | None = None):
        self.provider_name = name
        self.results = list(results or [ProviderSuccess(text=f"answer from {name}")])
        self.calls: list[dict] = []
        self.closed = False

    async def chat(self, system_prompt, messages, max_output_tokens=800, temperature=0.7):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "messages": list(messages),
                "max_output_tokens": max_output_tokens,
                "temperature": temperature,
            }
        )
        if len(self.results) > 1:
            return self.results.pop(0)
        return self.results[0]

    async def aclose(self) -> None:
        self.closed = True


def make_settings(available=(), **overrides) -> Settings:
    keys = {
        "openai_api_key": "sk-test" if "openai" in available else "",
        "google_api_key": "g-test" if "gemini" in available else "",
        "anthropic_api_key": "a-test" if "claude" in available else "",
        "cohere_api_key": "c-test" if "cohere" in available else "",
    }
    keys.update(overrides)
    return Settings(_env_file=None, **keys)


def make_orchestrator(available=(), fakes=None, **overrides):
    """Build an orchestrator whose adapters are FakeProviders for every provider."""
    settings = make_settings(available, **overrides)
    fakes = dict(fakes or {})
    for name in ALL_PROVIDERS:
        fakes.setdefault(name, FakeProvider(name))
    registry = ProviderRegistry(build_provider_configs(settings), settings, adapters=fakes)
    return LLMOrchestrator(registry, settings), fakes


def auth_failure(name: str = "provider") -> ProviderFailure:
    return ProviderFailure(
        kind=FailureKind.AUTHENTICATION, detail=f"{name} rejected key", status_code=401
    )


def user(text: str) -> ConversationMessage:
    return ConversationMessage(role="user", content=text)


def assistant(text: str, is_error: bool = False) -> ConversationMessage:
    return ConversationMessage(role="assistant", content=text, is_error=is_error)


@pytest.fixture
def iran_question():
    return [user("What about Iran and Israel?")]

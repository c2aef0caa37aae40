"""
Provider Registry

Builds the fixed, ordered set of provider configurations from settings once
at startup and creates one adapter per provider on first use.
Used by the orchestrator to resolve attempt order and by the routers to
report which providers are configured.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache

from app.core.config import Settings, get_settings
from app.services.llm.base import LLMProvider
from app.services.llm.models import ProviderStatus


class RequestShape(str, Enum):
    """Which adapter speaks a provider's wire format."""

    OPENAI_CHAT = "openai_chat"
    GEMINI_GENERATE = "gemini_generate"
    CLAUDE_MESSAGES = "claude_messages"
    COHERE_GENERATE = "cohere_generate"


@dataclass(frozen=True)
class ProviderConfig:
    name: str
    display_name: str
    credential: str = field(repr=False)
    endpoint: str
    request_shape: RequestShape
    model: str

    @property
    def available(self) -> bool:
        return bool(self.credential)


# ── Provider Configs ──────────────────────────────────────────────────────────
# Order here is the display order and the default attempt order.


def build_provider_configs(settings: Settings) -> tuple[ProviderConfig, ...]:
    return (
        ProviderConfig(
            name="openai",
            display_name="OpenAI GPT-4",
            credential=settings.openai_api_key.strip(),
            endpoint=settings.openai_base_url,
            request_shape=RequestShape.OPENAI_CHAT,
            model=settings.openai_model,
        ),
        ProviderConfig(
            name="gemini",
            display_name="Google Gemini",
            credential=settings.google_api_key.strip(),
            endpoint=settings.gemini_base_url,
            request_shape=RequestShape.GEMINI_GENERATE,
            model=settings.gemini_model,
        ),
        ProviderConfig(
            name="claude",
            display_name="Anthropic Claude",
            credential=settings.anthropic_api_key.strip(),
            endpoint=settings.anthropic_base_url,
            request_shape=RequestShape.CLAUDE_MESSAGES,
            model=settings.anthropic_model,
        ),
        ProviderConfig(
            name="cohere",
            display_name="Cohere",
            credential=settings.cohere_api_key.strip(),
            endpoint=settings.cohere_base_url,
            request_shape=RequestShape.COHERE_GENERATE,
            model=settings.cohere_model,
        ),
    )


# ── Provider Factory ──────────────────────────────────────────────────────────


def _create_provider(config: ProviderConfig, settings: Settings) -> LLMProvider:
    """Create an adapter instance for a provider config."""
    timeout = settings.request_timeout_seconds
    if config.request_shape == RequestShape.OPENAI_CHAT:
        from app.services.llm.openai_chat import OpenAIChatProvider
        return OpenAIChatProvider(config.credential, config.endpoint, config.model, timeout=timeout)
    elif config.request_shape == RequestShape.GEMINI_GENERATE:
        from app.services.llm.gemini import GeminiProvider
        return GeminiProvider(config.credential, config.endpoint, config.model, timeout=timeout)
    elif config.request_shape == RequestShape.CLAUDE_MESSAGES:
        from app.services.llm.claude import ClaudeProvider
        return ClaudeProvider(
            config.credential,
            config.endpoint,
            config.model,
            timeout=timeout,
            api_version=settings.anthropic_version,
        )
    elif config.request_shape == RequestShape.COHERE_GENERATE:
        from app.services.llm.cohere import CohereProvider
        return CohereProvider(config.credential, config.endpoint, config.model, timeout=timeout)
    else:
        raise ValueError(f"Unknown request shape: {config.request_shape}")


class ProviderRegistry:
    """Immutable provider set plus lazily created adapters."""

    def __init__(
        self,
        configs: tuple[ProviderConfig, ...],
        settings: Settings,
        adapters: dict[str, LLMProvider] | None = None,
    ):
        names = [c.name for c in configs]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate provider names: {names}")
        self._configs = tuple(configs)
        self._by_name = {c.name: c for c in self._configs}
        self._settings = settings
        self._adapters: dict[str, LLMProvider] = dict(adapters or {})

    def get(self, name: str) -> ProviderConfig | None:
        """Exact-match lookup by canonical provider name."""
        return self._by_name.get(name)

    def list_providers(self) -> list[ProviderStatus]:
        """Ordered provider list with availability; never includes credentials."""
        return [
            ProviderStatus(name=c.name, display_name=c.display_name, available=c.available)
            for c in self._configs
        ]

    def available(self) -> list[ProviderConfig]:
        return [c for c in self._configs if c.available]

    def has_any_available(self) -> bool:
        return any(c.available for c in self._configs)

    def resolve_preference(self, label: str | None) -> str | None:
        """
        Map a loose UI label ("OpenAI", "Gemini", "claude") to a canonical name.

        Exact canonical names win; otherwise the first provider whose name or
        display name contains the label (case-insensitive). Unknown labels
        resolve to None.
        """
        if not label or not label.strip():
            return None
        needle = label.strip().lower()
        if needle in self._by_name:
            return needle
        for c in self._configs:
            if needle in c.name.lower() or needle in c.display_name.lower():
                return c.name
        return None

    def get_adapter(self, name: str) -> LLMProvider:
        """Get (creating on first use) the adapter for a provider."""
        config = self._by_name.get(name)
        if config is None:
            raise ValueError(
                f"Unknown provider: {name}. "
                f"Available providers: {', '.join(self._by_name)}"
            )
        if name not in self._adapters:
            self._adapters[name] = _create_provider(config, self._settings)
        return self._adapters[name]

    async def aclose(self) -> None:
        for adapter in self._adapters.values():
            await adapter.aclose()
        self._adapters.clear()


def build_registry(settings: Settings) -> ProviderRegistry:
    return ProviderRegistry(build_provider_configs(settings), settings)


@lru_cache()
def get_registry() -> ProviderRegistry:
    """Process-wide registry, built once from settings."""
    return build_registry(get_settings())

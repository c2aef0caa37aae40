"""
LLM Provider Abstraction Layer

Provides a unified interface for multiple LLM providers (OpenAI, Gemini,
Claude, Cohere) with a provider registry, ordered fallback across providers,
and an offline canned response when none of them can answer.
"""

from app.services.llm.orchestrator import LLMOrchestrator, get_orchestrator
from app.services.llm.registry import ProviderRegistry, get_registry
from app.services.llm.models import ConversationMessage, ResponseResult, FALLBACK_PROVIDER_NAME

__all__ = [
    "LLMOrchestrator",
    "get_orchestrator",
    "ProviderRegistry",
    "get_registry",
    "ConversationMessage",
    "ResponseResult",
    "FALLBACK_PROVIDER_NAME",
]

"""
LLM Orchestrator

Shared logic for all providers:
- Attempt order (preferred provider first, then registry order)
- Bounded context window sent to each provider
- Sequential fallback across providers, first success wins
- Offline canned response when nothing is configured or everything failed

The orchestrator delegates the actual API call to the selected provider,
keeping provider implementations clean and focused on API translation.
"""

import logging

from app.core.config import Settings, get_settings
from app.services.llm.base import FailureKind, ProviderFailure, ProviderResult
from app.services.llm.fallback import latest_user_text, synthesize_fallback
from app.services.llm.models import (
    FALLBACK_PROVIDER_NAME,
    AttemptRecord,
    ConversationMessage,
    ResponseResult,
)
from app.services.llm.prompts import GEOPOLITICS_SYSTEM_PROMPT
from app.services.llm.registry import ProviderRegistry, get_registry

logger = logging.getLogger(__name__)


def bound_context(
    messages: list[ConversationMessage], window: int = 10
) -> list[ConversationMessage]:
    """
    Trailing context window: the newest message plus at most `window`
    preceding non-error messages, oldest first.
    """
    if not messages:
        return []
    *history, latest = messages
    history = [m for m in history if not m.is_error]
    trimmed = history[-window:] if window > 0 else []
    return trimmed + [latest]


class LLMOrchestrator:
    """Orchestrates provider calls with shared ordering and fallback logic."""

    def __init__(
        self,
        registry: ProviderRegistry,
        settings: Settings,
        system_prompt: str = GEOPOLITICS_SYSTEM_PROMPT,
    ):
        self.registry = registry
        self.settings = settings
        self.system_prompt = system_prompt

    def resolve_attempt_order(self, preferred_provider: str | None = None) -> list[str]:
        """
        Preferred provider first if it is known and available, then every
        other available provider in registry order. Unknown or unavailable
        preferences are ignored.
        """
        order: list[str] = []
        if preferred_provider:
            preferred = self.registry.get(preferred_provider)
            if preferred is not None and preferred.available:
                order.append(preferred.name)
            else:
                logger.debug("[LLM] Ignoring unavailable preference %r", preferred_provider)
        for config in self.registry.available():
            if config.name not in order:
                order.append(config.name)
        return order

    async def get_response(
        self,
        messages: list[ConversationMessage],
        preferred_provider: str | None = None,
    ) -> ResponseResult:
        """
        Produce exactly one ResponseResult for a conversation.

        Args:
            messages: Conversation so far, newest message last
            preferred_provider: Optional canonical provider name to try first

        Returns:
            ResponseResult from the first provider that succeeds, or the
            offline fallback tagged with FALLBACK_PROVIDER_NAME
        """
        if not self.registry.has_any_available():
            logger.info("[LLM] No providers configured; using offline fallback")
            return self._fallback(messages, [])

        context = bound_context(messages, self.settings.context_window_messages)
        attempts: list[AttemptRecord] = []

        for name in self.resolve_attempt_order(preferred_provider):
            result = await self._call(name, context)
            if result.ok:
                attempts.append(AttemptRecord(provider_name=name, outcome="success"))
                logger.info("[LLM] provider=%s succeeded after %d attempt(s)", name, len(attempts))
                return ResponseResult(
                    text=result.text,
                    provider_name=name,
                    was_fallback=False,
                    attempts=attempts,
                )

            attempts.append(
                AttemptRecord(provider_name=name, outcome=result.kind.value, detail=result.detail)
            )
            logger.warning("[LLM] provider=%s failed kind=%s: %s", name, result.kind.value, result.detail)

            if result.kind == FailureKind.TRANSIENT and self.settings.retry_transient_once:
                result = await self._call(name, context)
                if result.ok:
                    attempts.append(AttemptRecord(provider_name=name, outcome="success"))
                    logger.info("[LLM] provider=%s succeeded on retry", name)
                    return ResponseResult(
                        text=result.text,
                        provider_name=name,
                        was_fallback=False,
                        attempts=attempts,
                    )
                attempts.append(
                    AttemptRecord(provider_name=name, outcome=result.kind.value, detail=result.detail)
                )
                logger.warning(
                    "[LLM] provider=%s retry failed kind=%s: %s", name, result.kind.value, result.detail
                )

        logger.error("[LLM] All %d provider attempt(s) failed; using offline fallback", len(attempts))
        return self._fallback(messages, attempts)

    async def _call(self, name: str, context: list[ConversationMessage]) -> ProviderResult:
        """One provider call; unexpected adapter errors count as transient."""
        adapter = self.registry.get_adapter(name)
        try:
            return await adapter.chat(
                system_prompt=self.system_prompt,
                messages=context,
                max_output_tokens=self.settings.max_output_tokens,
                temperature=self.settings.temperature,
            )
        except Exception as e:
            logger.exception("[LLM] provider=%s raised unexpectedly", name)
            return ProviderFailure(kind=FailureKind.TRANSIENT, detail=f"{type(e).__name__}: {e}")

    def _fallback(
        self, messages: list[ConversationMessage], attempts: list[AttemptRecord]
    ) -> ResponseResult:
        return ResponseResult(
            text=synthesize_fallback(latest_user_text(messages)),
            provider_name=FALLBACK_PROVIDER_NAME,
            was_fallback=True,
            attempts=attempts,
        )


# ── Singleton ─────────────────────────────────────────────────────────────────

_orchestrator: LLMOrchestrator | None = None


def get_orchestrator() -> LLMOrchestrator:
    """Get or create the LLM orchestrator singleton."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = LLMOrchestrator(get_registry(), get_settings())
    return _orchestrator

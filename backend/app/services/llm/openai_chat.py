"""
OpenAI Chat Completions API Provider

Handles GPT-4o and other Chat Completions API models:
- client.chat.completions.create()
- system prompt sent as the first message
- response.choices[0].message.content
"""

import httpx
import openai
from openai import AsyncOpenAI

from app.services.llm.base import (
    FailureKind,
    LLMProvider,
    ProviderFailure,
    ProviderResult,
    ProviderSuccess,
    failure_for_status,
)
from app.services.llm.models import ConversationMessage


class OpenAIChatProvider(LLMProvider):
    """Provider for OpenAI Chat Completions API (GPT-4o, GPT-4o-mini, etc.)."""

    provider_name = "openai"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.model = model
        # Retries are the orchestrator's job; one call per invocation.
        self.client = AsyncOpenAI(
            api_key=api_key or "unset",
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def chat(
        self,
        system_prompt: str,
        messages: list[ConversationMessage],
        max_output_tokens: int = 800,
        temperature: float = 0.7,
    ) -> ProviderResult:
        if not self.api_key:
            return ProviderFailure(
                kind=FailureKind.AUTHENTICATION,
                detail="OpenAI API key not configured",
            )

        chat_messages = [{"role": "system", "content": system_prompt}] + [
            {"role": m.role, "content": m.content} for m in messages
        ]

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=chat_messages,
                max_completion_tokens=max_output_tokens,
                temperature=temperature,
            )
        except openai.APIStatusError as e:
            return failure_for_status(e.status_code, f"OpenAI API error: {e.message}")
        except openai.APIConnectionError as e:
            return ProviderFailure(kind=FailureKind.TRANSIENT, detail=f"OpenAI connection error: {e}")
        except openai.APIResponseValidationError as e:
            return ProviderFailure(kind=FailureKind.MALFORMED, detail=f"OpenAI response invalid: {e}")

        try:
            content = response.choices[0].message.content
        except (IndexError, TypeError, AttributeError):
            content = None

        if not content or not content.strip():
            return ProviderFailure(
                kind=FailureKind.MALFORMED,
                detail="Empty response from OpenAI Chat Completions API",
            )
        return ProviderSuccess(text=content.strip())

    async def aclose(self) -> None:
        await self.client.close()

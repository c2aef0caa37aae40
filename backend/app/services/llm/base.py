"""
Abstract base class for all LLM providers.

Each provider implements the API-specific translation layer: it turns the
bounded conversation window into one outbound request and turns the reply
back into a ProviderResult. Providers never retry and never raise for
backend failures; retry and fallback policy belongs to the orchestrator.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from app.services.llm.models import ConversationMessage


class FailureKind(str, Enum):
    """Why a single provider call failed."""

    AUTHENTICATION = "authentication"  # missing/invalid credential; never retry
    QUOTA = "quota"                    # rate limited or out of credits
    TRANSIENT = "transient"            # 5xx, timeout, connection error
    MALFORMED = "malformed"            # unparseable or empty body
    REJECTED = "rejected"              # other 4xx (bad request, unknown model)


@dataclass(frozen=True)
class ProviderSuccess:
    text: str
    ok: bool = True


@dataclass(frozen=True)
class ProviderFailure:
    kind: FailureKind
    detail: str
    status_code: int | None = None
    ok: bool = False


ProviderResult = ProviderSuccess | ProviderFailure


def failure_for_status(status_code: int, detail: str) -> ProviderFailure:
    """Map an HTTP error status onto a FailureKind."""
    if status_code in (401, 403):
        kind = FailureKind.AUTHENTICATION
    elif status_code == 429:
        kind = FailureKind.QUOTA
    elif status_code >= 500:
        kind = FailureKind.TRANSIENT
    else:
        kind = FailureKind.REJECTED
    return ProviderFailure(kind=kind, detail=detail, status_code=status_code)


def render_transcript(
    messages: list[ConversationMessage],
    user_label: str = "user",
    assistant_label: str = "assistant",
) -> str:
    """Flatten messages into a role-prefixed transcript for single-prompt APIs."""
    lines = []
    for msg in messages:
        if msg.role == "user":
            label = user_label
        elif msg.role == "assistant":
            label = assistant_label
        else:
            label = msg.role
        lines.append(f"{label}: {msg.content}")
    return "\n\n".join(lines)


class LLMProvider(ABC):
    """Abstract base class for all LLM providers."""

    provider_name: str = "base"

    @abstractmethod
    async def chat(
        self,
        system_prompt: str,
        messages: list[ConversationMessage],
        max_output_tokens: int = 800,
        temperature: float = 0.7,
    ) -> ProviderResult:
        """
        Send one chat request to the backend.

        Args:
            system_prompt: The fixed system instruction
            messages: Bounded conversation window, oldest first
            max_output_tokens: Maximum tokens in the response
            temperature: Sampling temperature

        Returns:
            ProviderSuccess with the response text, or ProviderFailure
        """
        ...

    async def aclose(self) -> None:
        """Release pooled connections."""
        return None


class HTTPJSONProvider(LLMProvider):
    """
    Shared plumbing for providers called over plain JSON/HTTP.

    Subclasses build the request (build_request) and pull the text out of a
    successful body (extract_text); posting, status mapping and body checks
    live here so every backend reports failures the same way.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.client = client or httpx.AsyncClient(timeout=timeout)

    @abstractmethod
    def build_request(
        self,
        system_prompt: str,
        messages: list[ConversationMessage],
        max_output_tokens: int,
        temperature: float,
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        """Return (url, headers, json_body) for one call."""
        ...

    @abstractmethod
    def extract_text(self, data: dict[str, Any]) -> str | None:
        """Return the response text, or None if the body has no usable text."""
        ...

    def error_message(self, data: Any) -> str | None:
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict):
                return error.get("message")
            if isinstance(error, str):
                return error
            return data.get("message")
        return None

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
                detail=f"{self.provider_name} API key not configured",
            )

        url, headers, body = self.build_request(
            system_prompt, messages, max_output_tokens, temperature
        )

        try:
            response = await self.client.post(url, headers=headers, json=body)
        except httpx.TimeoutException as e:
            return ProviderFailure(kind=FailureKind.TRANSIENT, detail=f"timeout: {e}")
        except httpx.HTTPError as e:
            return ProviderFailure(kind=FailureKind.TRANSIENT, detail=f"connection error: {e}")

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            message = self.error_message(data) or response.reason_phrase
            return failure_for_status(
                response.status_code, f"{self.provider_name} API error: {message}"
            )

        if not isinstance(data, dict):
            return ProviderFailure(
                kind=FailureKind.MALFORMED,
                detail=f"{self.provider_name} returned a non-JSON body",
                status_code=response.status_code,
            )

        try:
            text = self.extract_text(data)
        except (KeyError, IndexError, TypeError, AttributeError):
            text = None

        if not isinstance(text, str) or not text.strip():
            return ProviderFailure(
                kind=FailureKind.MALFORMED,
                detail=f"Empty response from {self.provider_name}",
                status_code=response.status_code,
            )
        return ProviderSuccess(text=text.strip())

    async def aclose(self) -> None:
        await self.client.aclose()

"""
Anthropic Claude Messages API Provider

The conversation is folded into one user turn as a Human/Assistant transcript:
- POST {base_url}/messages with x-api-key and anthropic-version headers
- system prompt in the top-level "system" field
- response.content[0].text
"""

from typing import Any

import httpx

from app.services.llm.base import HTTPJSONProvider, render_transcript
from app.services.llm.models import ConversationMessage


class ClaudeProvider(HTTPJSONProvider):
    """Provider for the Anthropic Messages API."""

    provider_name = "claude"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
        api_version: str = "2023-06-01",
    ):
        super().__init__(api_key, base_url, model, timeout=timeout, client=client)
        self.api_version = api_version

    def build_request(
        self,
        system_prompt: str,
        messages: list[ConversationMessage],
        max_output_tokens: int,
        temperature: float,
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        transcript = render_transcript(
            [m for m in messages if m.role != "system"],
            user_label="Human",
            assistant_label="Assistant",
        )
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }
        body = {
            "model": self.model,
            "system": system_prompt,
            "max_tokens": max_output_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": f"{transcript}\n\nAssistant:"}],
        }
        return f"{self.base_url}/messages", headers, body

    def extract_text(self, data: dict[str, Any]) -> str | None:
        for block in data["content"]:
            if block.get("type", "text") == "text" and block.get("text"):
                return block["text"]
        return None

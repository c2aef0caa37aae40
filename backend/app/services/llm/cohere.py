"""
Cohere Generate API Provider

- POST {base_url}/generate with a bearer token
- system prompt + role-prefixed transcript + trailing "response:"
- response.generations[0].text
"""

from typing import Any

from app.services.llm.base import HTTPJSONProvider, render_transcript
from app.services.llm.models import ConversationMessage


class CohereProvider(HTTPJSONProvider):
    """Provider for the Cohere generate API."""

    provider_name = "cohere"

    def build_request(
        self,
        system_prompt: str,
        messages: list[ConversationMessage],
        max_output_tokens: int,
        temperature: float,
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        prompt = f"{system_prompt}\n\n{render_transcript(messages)}\n\nresponse:"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        body = {
            "model": self.model,
            "prompt": prompt,
            "max_tokens": max_output_tokens,
            "temperature": temperature,
            "stop_sequences": ["user:", "system:"],
        }
        return f"{self.base_url}/generate", headers, body

    def extract_text(self, data: dict[str, Any]) -> str | None:
        return data["generations"][0].get("text")

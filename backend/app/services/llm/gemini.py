"""
Google Gemini generateContent Provider

Gemini takes a single prompt rather than a message list:
- POST {base_url}/models/{model}:generateContent, key in x-goog-api-key
- system prompt + role-prefixed transcript + trailing "assistant:"
- response.candidates[0].content.parts[0].text
"""

from typing import Any

from app.services.llm.base import HTTPJSONProvider, render_transcript
from app.services.llm.models import ConversationMessage


class GeminiProvider(HTTPJSONProvider):
    """Provider for the Google Gemini generateContent API."""

    provider_name = "gemini"

    def build_request(
        self,
        system_prompt: str,
        messages: list[ConversationMessage],
        max_output_tokens: int,
        temperature: float,
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        prompt = f"{system_prompt}\n\n{render_transcript(messages)}\n\nassistant:"
        url = f"{self.base_url}/models/{self.model}:generateContent"
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_tokens,
            },
        }
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}
        return url, headers, body

    def extract_text(self, data: dict[str, Any]) -> str | None:
        return data["candidates"][0]["content"]["parts"][0].get("text")

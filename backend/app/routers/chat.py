"""
Chat Router

Single entry point used by the chat UI. Provider outages never surface as
errors here: the orchestrator always answers, falling back to canned text.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.services.llm.models import ConversationMessage
from app.services.llm.orchestrator import LLMOrchestrator, get_orchestrator


router = APIRouter()


class ChatRequest(BaseModel):
    messages: list[ConversationMessage] = Field(min_length=1)
    preferred_provider: str | None = None


class ChatResponse(BaseModel):
    text: str
    provider_name: str
    was_fallback: bool


@router.post("", response_model=ChatResponse)
async def chat(
    data: ChatRequest,
    orchestrator: LLMOrchestrator = Depends(get_orchestrator),
):
    """Answer the latest message in the conversation."""
    # The UI sends labels like "OpenAI" or "Gemini"; the core only takes canonical names
    preferred = orchestrator.registry.resolve_preference(data.preferred_provider)

    result = await orchestrator.get_response(data.messages, preferred_provider=preferred)

    return ChatResponse(
        text=result.text,
        provider_name=result.provider_name,
        was_fallback=result.was_fallback,
    )

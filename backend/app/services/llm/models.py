"""
Pydantic models shared by the orchestrator, the providers and the routers.

Providers only ever see ConversationMessage; the orchestrator always hands
back a ResponseResult, whichever provider (or the offline fallback) produced it.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict


FALLBACK_PROVIDER_NAME = "fallback"

Role = Literal["system", "user", "assistant"]


class ConversationMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    is_error: bool = False  # UI-rendered error notice; never sent as context


class AttemptRecord(BaseModel):
    provider_name: str
    outcome: str  # "success" or a FailureKind value
    detail: str = ""


class ResponseResult(BaseModel):
    text: str
    provider_name: str
    was_fallback: bool
    attempts: list[AttemptRecord] = []


class ProviderStatus(BaseModel):
    name: str
    display_name: str
    available: bool

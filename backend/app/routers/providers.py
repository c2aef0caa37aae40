"""
Providers Router

Exposes which AI providers are configured to the frontend.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.services.llm.models import ProviderStatus
from app.services.llm.registry import ProviderRegistry, get_registry


router = APIRouter()


class ProvidersResponse(BaseModel):
    providers: list[ProviderStatus]
    any_available: bool
    available_count: int


@router.get("", response_model=ProvidersResponse)
async def get_providers(registry: ProviderRegistry = Depends(get_registry)):
    """Return every provider with its availability; credentials are never included."""
    providers = registry.list_providers()
    return ProvidersResponse(
        providers=providers,
        any_available=registry.has_any_available(),
        available_count=sum(1 for p in providers if p.available),
    )

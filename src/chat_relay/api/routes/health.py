"""
Routes API pour le health check.
"""
from fastapi import APIRouter, Depends

from ...proxy.providers import ProviderRegistry, get_provider_registry

router = APIRouter()


@router.get("/health")
async def health_check(providers: ProviderRegistry = Depends(get_provider_registry)):
    """Health check avec le statut de configuration des providers."""
    return {
        "status": "ok",
        "providers": providers.configured()
    }

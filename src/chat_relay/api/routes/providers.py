"""
Routes API pour la liste des providers.
"""
from fastapi import APIRouter, Request

from ...config.settings import Settings
from ...core.constants import PROVIDER_DISPLAY_NAMES

router = APIRouter()


@router.get("")
async def api_get_providers(request: Request):
    """Retourne les providers supportés avec leurs modèles (sans secrets)."""
    settings: Settings = request.app.state.settings

    result = []
    for key, provider in settings.providers.items():
        models = sorted(set(provider.models))
        if provider.default_model and provider.default_model not in models:
            models.insert(0, provider.default_model)

        result.append({
            "key": key,
            "name": PROVIDER_DISPLAY_NAMES.get(key, key),
            "configured": provider.is_configured,
            "default_model": provider.default_model,
            "models": models
        })

    # Providers configurés d'abord, puis alphabétique
    result.sort(key=lambda x: (0 if x["configured"] else 1, x["name"]))

    return result

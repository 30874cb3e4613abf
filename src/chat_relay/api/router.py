"""
Router principal de l'API.
"""
from fastapi import APIRouter

from .routes import chat, health, providers

# Router principal
api_router = APIRouter()

api_router.include_router(chat.router, prefix="/api", tags=["chat"])
api_router.include_router(providers.router, prefix="/api/providers", tags=["providers"])
api_router.include_router(health.router, prefix="", tags=["health"])

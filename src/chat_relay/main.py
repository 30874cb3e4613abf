"""
Chat Relay - Application FastAPI Factory.
Relais streaming authentifié vers OpenAI et Gemini.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.router import api_router
from .auth.session import SessionResolver
from .config.loader import load_config
from .config.settings import Settings
from .proxy.providers import ProviderRegistry, create_provider_registry

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def create_app(
    settings: Optional[Settings] = None,
    providers: Optional[ProviderRegistry] = None,
    session_resolver: Optional[SessionResolver] = None,
    config_path: str = None
) -> FastAPI:
    """
    Factory pour créer l'application FastAPI.

    Les collaborateurs (providers, résolveur de session) sont construits
    une fois ici puis partagés par toutes les requêtes via app.state.
    Chacun peut être injecté (tests, intégration dans une autre app).

    Args:
        settings: Configuration (chargée depuis config.toml si absente)
        providers: Registry des providers (construit depuis settings si absent)
        session_resolver: Résolveur de session (construit depuis settings si absent)
        config_path: Chemin du fichier de configuration (optionnel)

    Returns:
        Instance configurée de FastAPI
    """
    if settings is None:
        settings = Settings.from_config(load_config(config_path))

    _configure_logging(settings.log_level)

    if session_resolver is None:
        session_resolver = SessionResolver(settings.session)
    if providers is None:
        providers = create_provider_registry(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Gestion du cycle de vie de l'application."""
        _startup(app)
        yield
        await _shutdown(app)

    app = FastAPI(
        title="Chat Relay",
        description="Relais de chat authentifié vers OpenAI et Gemini, en streaming",
        version=__version__,
        lifespan=lifespan
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.state.settings = settings
    app.state.providers = providers
    app.state.session_resolver = session_resolver

    app.include_router(api_router)

    return app


def _configure_logging(level: str) -> None:
    """Niveau de log du package (le handler racine reste celui d'uvicorn s'il existe)."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("chat_relay").setLevel(level)


def _startup(app: FastAPI):
    """Initialisation au démarrage."""
    print("🚀 Démarrage de Chat Relay...")

    configured = app.state.providers.configured()
    for name, is_configured in configured.items():
        status = "✅" if is_configured else "⚠️ non configuré"
        print(f"   {status} {name}")

    if not any(configured.values()):
        print("⚠️ Aucun provider configuré: toutes les requêtes de chat échoueront")


async def _shutdown(app: FastAPI):
    """Arrêt de l'application."""
    print("\n👋 Arrêt du serveur...")
    await app.state.providers.aclose()
    print("✅ Serveur arrêté proprement")

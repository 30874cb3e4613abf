"""
Providers de chat: OpenAI et Gemini derrière une interface commune.

Les clients SDK sont construits une seule fois au démarrage
(create_provider_registry) puis injectés dans le handler via l'état de
l'application.
"""
import logging
from typing import AsyncIterator, Dict, Optional

import httpx
from fastapi import Request
from google import genai
from google.genai import types
from openai import AsyncOpenAI

from ..config.settings import ProviderConfig, RelayConfig, Settings
from ..core.constants import (
    PROVIDER_OPENAI,
    PROVIDER_GEMINI,
    SUPPORTED_PROVIDERS,
    HEADER_HISTORY_REPAIRED,
    HEADER_HISTORY_DISCARDED,
)
from ..core.exceptions import ProviderError, UnsupportedProviderError
from ..core.models import ChatRequest, GeminiTurn, RelayStream
from .transformers import build_safety_settings, convert_to_gemini_turns

logger = logging.getLogger(__name__)


class ChatProvider:
    """Interface commune des providers de chat en streaming."""

    name: str = ""

    def __init__(self, config: ProviderConfig):
        self.config = config

    async def open_stream(self, request: ChatRequest) -> RelayStream:
        """
        Émet l'appel amont et retourne le stream de texte.

        Les erreurs de l'appel initial (auth, modèle inconnu, quota) sont
        levées ici, avant tout envoi de réponse au client.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        """Libère les ressources du client (arrêt de l'application)."""


class OpenAIChatProvider(ChatProvider):
    """Chat completions OpenAI en streaming (SDK AsyncOpenAI)."""

    name = PROVIDER_OPENAI

    def __init__(self, config: ProviderConfig, client: AsyncOpenAI):
        super().__init__(config)
        self.client = client

    @classmethod
    def from_config(cls, config: ProviderConfig, relay: RelayConfig) -> "OpenAIChatProvider":
        """
        Crée le provider et son client HTTPX partagé.

        Pas de retry SDK: un échec est terminal pour la requête.
        """
        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(relay.request_timeout_s, connect=relay.connect_timeout_s),
            limits=httpx.Limits(
                max_keepalive_connections=relay.max_keepalive_connections,
                max_connections=relay.max_connections
            )
        )
        client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            max_retries=0,
            http_client=http_client
        )
        return cls(config, client)

    async def open_stream(self, request: ChatRequest) -> RelayStream:
        stream = await self.client.chat.completions.create(
            model=request.model_name,
            messages=request.message_dicts(),
            stream=True
        )
        return RelayStream(
            provider=self.name,
            model=request.model_name,
            chunks=self._iter_text(stream)
        )

    @staticmethod
    async def _iter_text(stream) -> AsyncIterator[str]:
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        finally:
            await stream.close()

    async def aclose(self) -> None:
        await self.client.close()


class GeminiChatProvider(ChatProvider):
    """Génération Gemini en streaming (SDK google-genai)."""

    name = PROVIDER_GEMINI

    def __init__(self, config: ProviderConfig, client: genai.Client):
        super().__init__(config)
        self.client = client

    @classmethod
    def from_config(cls, config: ProviderConfig, relay: RelayConfig) -> "GeminiChatProvider":
        """Crée le provider; le timeout HttpOptions est en millisecondes."""
        http_options = types.HttpOptions(
            timeout=int(relay.request_timeout_s * 1000),
            base_url=config.base_url
        )
        client = genai.Client(api_key=config.api_key, http_options=http_options)
        return cls(config, client)

    def build_generation_config(self, system_messages) -> types.GenerateContentConfig:
        """Seuils de sécurité fixes + system_instruction optionnelle."""
        safety_settings = [
            types.SafetySetting(
                category=types.HarmCategory(setting["category"]),
                threshold=types.HarmBlockThreshold(setting["threshold"])
            )
            for setting in build_safety_settings()
        ]
        system_instruction = None
        if self.config.system_instruction and system_messages:
            system_instruction = "\n\n".join(system_messages)
        return types.GenerateContentConfig(
            safety_settings=safety_settings,
            system_instruction=system_instruction
        )

    @staticmethod
    def to_content(turn: GeminiTurn) -> types.Content:
        return types.Content(
            role=turn.role,
            parts=[types.Part(text=part["text"]) for part in turn.parts]
        )

    async def open_stream(self, request: ChatRequest) -> RelayStream:
        conversion = convert_to_gemini_turns(request.messages)

        stream = await self.client.aio.models.generate_content_stream(
            model=request.model_name,
            contents=[self.to_content(turn) for turn in conversion.turns],
            config=self.build_generation_config(conversion.system_messages)
        )
        # Le SDK n'émet la requête HTTP qu'à la première itération: les
        # erreurs d'auth, de modèle ou de quota doivent sortir avant la 200.
        first_chunk = await anext(stream, None)

        headers = {}
        if conversion.repaired:
            headers[HEADER_HISTORY_REPAIRED] = "true"
            headers[HEADER_HISTORY_DISCARDED] = str(conversion.discarded)

        return RelayStream(
            provider=self.name,
            model=request.model_name,
            chunks=self._iter_text(stream, first_chunk),
            headers=headers
        )

    @staticmethod
    async def _iter_text(stream, first_chunk) -> AsyncIterator[str]:
        try:
            if first_chunk is not None and first_chunk.text:
                yield first_chunk.text
            async for chunk in stream:
                text = chunk.text
                if text:
                    yield text
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

    async def aclose(self) -> None:
        await self.client.aio.aclose()


PROVIDER_CLASSES = {
    PROVIDER_OPENAI: OpenAIChatProvider,
    PROVIDER_GEMINI: GeminiChatProvider,
}


class ProviderRegistry:
    """Providers construits au démarrage, indexés par modelProvider."""

    def __init__(self, providers: Dict[str, ChatProvider]):
        self._providers = dict(providers)

    def get(self, name: str) -> ChatProvider:
        """
        Récupère le provider pour une valeur de modelProvider.

        Raises:
            UnsupportedProviderError: Si le nom n'est ni openai ni gemini
            ProviderError: Si le provider est connu mais sans clé API
        """
        if name not in SUPPORTED_PROVIDERS:
            raise UnsupportedProviderError(name)
        provider = self._providers.get(name)
        if provider is None:
            raise ProviderError(f"Provider '{name}' is not configured", provider=name)
        return provider

    def configured(self) -> Dict[str, bool]:
        """Statut de configuration de chaque provider supporté."""
        return {name: name in self._providers for name in SUPPORTED_PROVIDERS}

    async def aclose(self) -> None:
        for provider in self._providers.values():
            await provider.aclose()


def get_provider_registry(request: Request) -> ProviderRegistry:
    """Dépendance FastAPI: registry injecté au démarrage de l'application."""
    return request.app.state.providers


def create_provider_registry(settings: Settings) -> ProviderRegistry:
    """
    Construit les clients des providers configurés.

    Args:
        settings: Configuration de l'application

    Returns:
        Instance de ProviderRegistry
    """
    providers: Dict[str, ChatProvider] = {}

    for name, provider_class in PROVIDER_CLASSES.items():
        config: Optional[ProviderConfig] = settings.get_provider(name)
        if config is None or not config.is_configured:
            logger.warning(f"[PROVIDERS] Aucune clé API pour {name}: provider désactivé")
            continue
        providers[name] = provider_class.from_config(config, settings.relay)
        logger.info(f"[PROVIDERS] {name} initialisé")

    return ProviderRegistry(providers)

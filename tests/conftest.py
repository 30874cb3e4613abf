"""
Configuration des tests pytest.
"""
import pytest
import sys
import os

from fastapi.testclient import TestClient

# Ajoute src au path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from chat_relay.auth.session import SessionResolver  # noqa: E402
from chat_relay.config.settings import (  # noqa: E402
    Settings,
    SessionConfig,
    ProviderConfig,
)
from chat_relay.core.models import RelayStream  # noqa: E402
from chat_relay.main import create_app  # noqa: E402
from chat_relay.proxy.providers import ChatProvider, ProviderRegistry  # noqa: E402


async def async_iter(items, error=None):
    """Itérateur async sur une liste (simule un stream provider), puis lève `error`."""
    for item in items:
        yield item
    if error is not None:
        raise error


class FakeProvider(ChatProvider):
    """Provider de test: enregistre les requêtes et rejoue des chunks."""

    def __init__(self, name, chunks=None, error=None, headers=None, stream_error=None):
        super().__init__(ProviderConfig(key=name, api_key="test-key"))
        self.name = name
        self.chunks = chunks or []
        self.error = error
        self.stream_error = stream_error
        self.headers = headers or {}
        self.requests = []
        self.closed = False

    async def open_stream(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return RelayStream(
            provider=self.name,
            model=request.model_name,
            chunks=async_iter(self.chunks, self.stream_error),
            headers=dict(self.headers)
        )

    async def aclose(self):
        self.closed = True


@pytest.fixture
def anyio_backend():
    """Les tests async tournent sur asyncio uniquement."""
    return "asyncio"


@pytest.fixture
def fake_provider():
    """Classe FakeProvider (un provider par test, construit à la demande)."""
    return FakeProvider


@pytest.fixture
def test_settings():
    """Fixture pour la configuration de test."""
    return Settings(
        session=SessionConfig(secret="test-secret"),
        providers={
            "openai": ProviderConfig(key="openai", api_key="sk-test", default_model="gpt-4o-mini"),
            "gemini": ProviderConfig(key="gemini", api_key="gm-test", default_model="gemini-2.0-flash"),
        }
    )


@pytest.fixture
def session_resolver(test_settings):
    return SessionResolver(test_settings.session)


@pytest.fixture
def session_cookie(session_resolver):
    """Cookie de session valide pour l'utilisateur user-1."""
    return session_resolver.sign({"user": {"id": "user-1", "email": "user@example.com"}})


@pytest.fixture
def make_client(test_settings, session_resolver):
    """
    Construit un TestClient avec des providers injectés.

    Usage: make_client({"openai": FakeProvider("openai", chunks=[...])}, cookie=...)
    """
    def _make(providers, cookie=None):
        app = create_app(
            settings=test_settings,
            providers=ProviderRegistry(providers),
            session_resolver=session_resolver
        )
        client = TestClient(app)
        if cookie is not None:
            client.cookies.set(test_settings.session.cookie_name, cookie)
        return client

    return _make


@pytest.fixture
def sample_messages():
    """Fixture pour des messages de test."""
    return [
        {"role": "system", "content": "Tu es un assistant utile."},
        {"role": "user", "content": "Bonjour, comment ça va?"},
        {"role": "assistant", "content": "Je vais bien, merci!"}
    ]

"""
Tests unitaires pour le relais streaming.

Le texte doit arriver au client fragment par fragment, et une erreur
amont ne doit jamais ressembler à une fin de stream normale.
"""
import pytest

import httpx

from chat_relay.core.exceptions import StreamingError
from chat_relay.core.models import RelayStream
from chat_relay.proxy.stream import relay_generator

pytestmark = pytest.mark.anyio


async def async_iter(items):
    """Helper pour créer un async iterator."""
    for item in items:
        yield item


def make_stream(chunks):
    return RelayStream(provider="openai", model="gpt-4o-mini", chunks=chunks)


async def collect(generator):
    return [chunk async for chunk in generator]


class TestRelayGenerator:
    """Tests du générateur de relais."""

    async def test_chunks_are_relayed_one_by_one(self):
        """["Hel", "lo"] donne deux chunks dont la concaténation est "Hello"."""
        chunks = await collect(relay_generator(make_stream(async_iter(["Hel", "lo"]))))

        assert chunks == [b"Hel", b"lo"]
        assert b"".join(chunks) == b"Hello"

    async def test_first_chunk_available_before_stream_ends(self):
        """Le premier fragment est disponible sans attendre la fin du stream amont."""
        produced = []

        async def upstream():
            produced.append("Hel")
            yield "Hel"
            produced.append("lo")
            yield "lo"

        generator = relay_generator(make_stream(upstream()))
        first = await generator.__anext__()

        assert first == b"Hel"
        assert produced == ["Hel"]
        await generator.aclose()

    async def test_empty_fragments_are_skipped(self):
        """Les fragments vides ou None ne sont pas relayés."""
        chunks = await collect(relay_generator(make_stream(async_iter(["A", "", None, "B"]))))
        assert chunks == [b"A", b"B"]

    async def test_text_is_utf8_encoded(self):
        """Encodage UTF-8 des fragments."""
        chunks = await collect(relay_generator(make_stream(async_iter(["été"]))))
        assert chunks == ["été".encode("utf-8")]

    async def test_mid_stream_error_aborts_stream(self):
        """Une erreur amont lève StreamingError après les chunks déjà relayés."""
        async def failing_stream():
            yield "Hel"
            raise httpx.ReadError("Connection reset by peer")

        received = []
        with pytest.raises(StreamingError) as exc_info:
            async for chunk in relay_generator(make_stream(failing_stream())):
                received.append(chunk)

        assert received == [b"Hel"]
        error = exc_info.value
        assert error.error_type == "connection_error"
        assert error.chunks_relayed == 1
        assert error.details["provider"] == "openai"
        assert isinstance(error.__cause__, httpx.ReadError)

    async def test_timeout_error_type(self):
        """Un timeout amont est classé timeout_error."""
        async def timeout_stream():
            raise httpx.ReadTimeout("Read timeout")
            yield "never"

        with pytest.raises(StreamingError) as exc_info:
            await collect(relay_generator(make_stream(timeout_stream())))

        assert exc_info.value.error_type == "timeout_error"
        assert exc_info.value.chunks_relayed == 0

    async def test_upstream_closed_after_completion(self):
        """Le stream amont est fermé en fin de relais."""
        state = {"closed": False}

        async def upstream():
            try:
                yield "ok"
            finally:
                state["closed"] = True

        await collect(relay_generator(make_stream(upstream())))
        assert state["closed"] is True

    async def test_upstream_closed_on_client_disconnect(self):
        """Fermer le relais (client parti) ferme le stream amont."""
        state = {"closed": False}

        async def upstream():
            try:
                yield "Hel"
                yield "lo"
            finally:
                state["closed"] = True

        generator = relay_generator(make_stream(upstream()))
        assert await generator.__anext__() == b"Hel"
        await generator.aclose()

        assert state["closed"] is True

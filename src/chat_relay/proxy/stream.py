"""
Relais du streaming provider vers le client HTTP.

Chaque fragment de texte reçu est encodé et transmis immédiatement.
Une erreur amont après le début du stream est loggée puis relevée:
la réponse HTTP est interrompue au lieu de se terminer proprement.
"""
import logging
import time
from typing import AsyncGenerator

from ..core.constants import STREAMING_ERROR_TYPES
from ..core.exceptions import StreamingError
from ..core.models import RelayStream
from .errors import classify_stream_error

logger = logging.getLogger(__name__)


async def relay_generator(stream: RelayStream) -> AsyncGenerator[bytes, None]:
    """
    Générateur de streaming: texte amont → bytes UTF-8.

    Args:
        stream: Stream amont ouvert par un provider

    Yields:
        Un chunk de bytes par fragment de texte non vide

    Raises:
        StreamingError: Si le provider échoue pendant le stream
    """
    relayed = 0
    relayed_bytes = 0
    started = time.monotonic()

    try:
        async for text in stream.chunks:
            if not text:
                continue
            data = text.encode("utf-8")
            relayed += 1
            relayed_bytes += len(data)
            yield data

    except Exception as e:
        error_type = classify_stream_error(e)
        message = STREAMING_ERROR_TYPES[error_type]
        logger.error(
            f"[STREAM_ERROR] {message} ({stream.provider}/{stream.model}) après "
            f"{relayed} chunk(s) et {time.monotonic() - started:.2f}s: {str(e)[:200]}"
        )
        raise StreamingError(
            message=message,
            provider=stream.provider,
            model=stream.model,
            error_type=error_type,
            chunks_relayed=relayed
        ) from e

    finally:
        # Fin normale, erreur ou déconnexion client: le stream amont est fermé
        aclose = getattr(stream.chunks, "aclose", None)
        if aclose is not None:
            await aclose()

    logger.info(
        f"[STREAM] {stream.provider}/{stream.model}: {relayed} chunk(s), "
        f"{relayed_bytes} octet(s) en {time.monotonic() - started:.2f}s"
    )

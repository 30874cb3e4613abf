"""
Traduction des erreurs providers en réponses HTTP.
"""
from typing import Any, Dict, Tuple

import httpx
import openai
from google.genai import errors as genai_errors

from ..core.constants import GENERIC_ERROR_MESSAGE
from ..core.exceptions import ChatRelayError


def _http_status(value: Any) -> int:
    if isinstance(value, int) and 400 <= value <= 599:
        return value
    return 500


def describe_provider_error(error: Exception) -> Tuple[int, Dict[str, Any]]:
    """
    Calcule le statut HTTP et le corps JSON d'une erreur de dispatch.

    - Erreurs du relais: leur statut et leur message
    - Erreurs OpenAI / Gemini: statut et message du provider, plus le code
      du provider s'il existe
    - Tout le reste: 500 avec un message fixe

    Args:
        error: Exception levée pendant le dispatch

    Returns:
        Tuple (status_code, body)
    """
    if isinstance(error, ChatRelayError):
        return error.status_code, error.to_response()

    if isinstance(error, openai.APIError):
        body: Dict[str, Any] = {"message": error.message}
        if error.code is not None:
            body["code"] = error.code
        return _http_status(getattr(error, "status_code", None)), body

    if isinstance(error, genai_errors.APIError):
        body = {"message": error.message or str(error)}
        if error.status:
            body["code"] = error.status
        return _http_status(error.code), body

    return 500, {"message": GENERIC_ERROR_MESSAGE}


def classify_stream_error(error: Exception) -> str:
    """Type d'erreur streaming (clé de STREAMING_ERROR_TYPES)."""
    if isinstance(error, (openai.APITimeoutError, httpx.TimeoutException)):
        return "timeout_error"
    if isinstance(error, (openai.APIConnectionError, httpx.TransportError)):
        return "connection_error"
    if isinstance(error, (openai.APIError, genai_errors.APIError)):
        return "upstream_error"
    return "unknown"

"""
Route principale /api/chat/completions.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, StreamingResponse

from ...auth.session import SessionResolver, get_session_resolver
from ...core.constants import HEADER_PROVIDER, HEADER_MODEL
from ...core.exceptions import (
    AuthenticationError,
    ChatRelayError,
    RequestValidationError,
    TokenizationError,
)
from ...core.models import ChatRequest, SessionInfo
from ...core.tokens import count_tokens_tiktoken
from ...proxy.errors import describe_provider_error
from ...proxy.providers import ProviderRegistry, get_provider_registry
from ...proxy.stream import relay_generator

logger = logging.getLogger(__name__)

router = APIRouter()


def _error_response(error: ChatRelayError) -> JSONResponse:
    return JSONResponse(content=error.to_response(), status_code=error.status_code)


async def _log_request(session: SessionInfo, chat_request: ChatRequest) -> None:
    """Log de la requête avec estimation de la taille du prompt."""
    try:
        request_tokens = await run_in_threadpool(count_tokens_tiktoken, chat_request.message_dicts())
    except TokenizationError as e:
        logger.warning(f"[RELAY] Estimation des tokens impossible: {e}")
        request_tokens = 0

    logger.info(
        f"[RELAY] user={session.user_id} → {chat_request.model_provider}/{chat_request.model_name}: "
        f"{len(chat_request.messages)} message(s), ~{request_tokens:,} tokens"
    )


@router.post("/chat/completions")
async def relay_chat(
    request: Request,
    session_resolver: SessionResolver = Depends(get_session_resolver),
    providers: ProviderRegistry = Depends(get_provider_registry),
):
    """
    Relais de chat vers OpenAI ou Gemini:
    - Session obligatoire (401 sinon, body non lu)
    - Validation du body (400 nommant le champ fautif)
    - Dispatch selon modelProvider
    - Streaming du texte généré, fragment par fragment
    """
    session = session_resolver.resolve(request)
    if session is None:
        return _error_response(AuthenticationError())

    try:
        body = await request.json()
    except ValueError:
        return _error_response(RequestValidationError("Invalid JSON body", field="body"))

    try:
        chat_request = ChatRequest.from_body(body)
    except RequestValidationError as e:
        return _error_response(e)

    await _log_request(session, chat_request)

    try:
        provider = providers.get(chat_request.model_provider)
        stream = await provider.open_stream(chat_request)
    except Exception as e:
        status_code, content = describe_provider_error(e)
        if status_code >= 500:
            logger.exception(
                f"[RELAY] Erreur {status_code} ({chat_request.model_provider}/"
                f"{chat_request.model_name}): {e}"
            )
        else:
            logger.warning(f"[RELAY] Requête rejetée ({status_code}): {content['message']}")
        return JSONResponse(content=content, status_code=status_code)

    headers = {
        "Cache-Control": "no-cache",
        "X-Accel-Buffering": "no",
        HEADER_PROVIDER: stream.provider,
        HEADER_MODEL: stream.model,
        **stream.headers
    }

    return StreamingResponse(
        relay_generator(stream),
        media_type="text/plain; charset=utf-8",
        headers=headers
    )

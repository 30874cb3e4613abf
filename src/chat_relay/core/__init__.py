"""
Cœur métier de Chat Relay.
Modules indépendants sans dépendances vers les couches api/ et proxy/.
"""

from .exceptions import (
    ChatRelayError,
    ConfigurationError,
    AuthenticationError,
    RequestValidationError,
    UnsupportedProviderError,
    ProviderError,
    TokenizationError,
    StreamingError,
)
from .constants import (
    PROVIDER_OPENAI,
    PROVIDER_GEMINI,
    SUPPORTED_PROVIDERS,
    GENERIC_ERROR_MESSAGE,
)
from .tokens import ENCODING, count_tokens_tiktoken
from .models import (
    ChatMessage,
    ChatRequest,
    SessionInfo,
    GeminiTurn,
    GeminiConversion,
    RelayStream,
)

__all__ = [
    # Exceptions
    "ChatRelayError",
    "ConfigurationError",
    "AuthenticationError",
    "RequestValidationError",
    "UnsupportedProviderError",
    "ProviderError",
    "TokenizationError",
    "StreamingError",
    # Constants
    "PROVIDER_OPENAI",
    "PROVIDER_GEMINI",
    "SUPPORTED_PROVIDERS",
    "GENERIC_ERROR_MESSAGE",
    # Tokens
    "ENCODING",
    "count_tokens_tiktoken",
    # Models
    "ChatMessage",
    "ChatRequest",
    "SessionInfo",
    "GeminiTurn",
    "GeminiConversion",
    "RelayStream",
]

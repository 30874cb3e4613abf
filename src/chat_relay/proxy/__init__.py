"""
Relais des conversations vers les APIs LLM.
"""

from .transformers import convert_to_gemini_turns, build_safety_settings
from .stream import relay_generator
from .errors import describe_provider_error, classify_stream_error
from .providers import (
    ChatProvider,
    OpenAIChatProvider,
    GeminiChatProvider,
    ProviderRegistry,
    create_provider_registry,
    get_provider_registry,
)

__all__ = [
    "convert_to_gemini_turns",
    "build_safety_settings",
    "relay_generator",
    "describe_provider_error",
    "classify_stream_error",
    "ChatProvider",
    "OpenAIChatProvider",
    "GeminiChatProvider",
    "ProviderRegistry",
    "create_provider_registry",
    "get_provider_registry",
]

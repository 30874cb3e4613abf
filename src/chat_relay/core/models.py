"""
Dataclasses métier pour Chat Relay.
"""
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, List, Optional

from .constants import MESSAGE_ROLES
from .exceptions import RequestValidationError


@dataclass
class ChatMessage:
    """Un message de la conversation (format OpenAI)."""
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        """Convertit le message en dictionnaire."""
        return {"role": self.role, "content": self.content}


@dataclass
class ChatRequest:
    """Requête de chat validée, créée à chaque appel HTTP."""
    messages: List[ChatMessage]
    model_provider: str
    model_name: str

    @classmethod
    def from_body(cls, body: Any) -> "ChatRequest":
        """
        Valide le body JSON et construit la requête.

        L'ordre des vérifications détermine le champ nommé dans l'erreur:
        messages, puis modelProvider, puis modelName.

        Args:
            body: Body JSON décodé

        Returns:
            Instance de ChatRequest

        Raises:
            RequestValidationError: Si un champ est manquant ou malformé
        """
        if not isinstance(body, dict):
            raise RequestValidationError("Invalid JSON body", field="body")

        raw_messages = body.get("messages")
        if not isinstance(raw_messages, list) or not raw_messages:
            raise RequestValidationError("Messages are required", field="messages")

        messages = []
        for index, raw in enumerate(raw_messages):
            if (
                not isinstance(raw, dict)
                or raw.get("role") not in MESSAGE_ROLES
                or not isinstance(raw.get("content"), str)
            ):
                raise RequestValidationError(
                    f"messages[{index}] is invalid", field=f"messages[{index}]"
                )
            messages.append(ChatMessage(role=raw["role"], content=raw["content"]))

        model_provider = body.get("modelProvider")
        if not isinstance(model_provider, str) or not model_provider:
            raise RequestValidationError("modelProvider is required", field="modelProvider")

        model_name = body.get("modelName")
        if not isinstance(model_name, str) or not model_name:
            raise RequestValidationError("modelName is required", field="modelName")

        return cls(messages=messages, model_provider=model_provider, model_name=model_name)

    def message_dicts(self) -> List[Dict[str, str]]:
        return [message.to_dict() for message in self.messages]


@dataclass
class SessionInfo:
    """Session de l'appelant, résolue depuis le cookie signé (lecture seule)."""
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    expires: Optional[str] = None


@dataclass
class GeminiTurn:
    """Un tour du dialogue Gemini (rôle user ou model)."""
    role: str
    parts: List[Dict[str, str]]

    @classmethod
    def text(cls, role: str, text: str) -> "GeminiTurn":
        return cls(role=role, parts=[{"text": text}])


@dataclass
class GeminiConversion:
    """Résultat de la conversion messages → tours Gemini."""
    turns: List[GeminiTurn]
    system_messages: List[str] = field(default_factory=list)
    repaired: bool = False
    discarded: int = 0


@dataclass
class RelayStream:
    """Stream amont ouvert, prêt à être relayé au client."""
    provider: str
    model: str
    chunks: AsyncIterator[str]
    headers: Dict[str, str] = field(default_factory=dict)

"""
Tokenization avec Tiktoken - Estimation de la taille des conversations relayées.
"""
from typing import List

import tiktoken

from .exceptions import TokenizationError

# Encodage Tiktoken (cl100k_base = même encodage que GPT-4)
ENCODING = tiktoken.get_encoding("cl100k_base")


def count_tokens_tiktoken(messages: List[dict]) -> int:
    """
    Compte les tokens d'une liste de messages au format OpenAI.

    Args:
        messages: Liste de messages {role, content}

    Returns:
        Nombre de tokens estimé

    Raises:
        TokenizationError: Si une erreur survient lors du comptage
    """
    if not messages:
        return 0

    try:
        token_count = 0

        for message in messages:
            token_count += 3  # Tokens de début/role/fin
            token_count += len(ENCODING.encode(message.get("role", "")))
            content = message.get("content", "")
            if isinstance(content, str):
                token_count += len(ENCODING.encode(content))

        token_count += 3
        return token_count
    except Exception as e:
        raise TokenizationError(
            message=f"Erreur lors du comptage des tokens: {e}",
            content_preview=str(messages)[:200]
        ) from e

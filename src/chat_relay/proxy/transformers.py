"""
Transformations de format entre les messages OpenAI et Gemini.
"""
import logging
from typing import Dict, List

from ..core.constants import (
    GEMINI_USER_ROLE,
    GEMINI_MODEL_ROLE,
    GEMINI_MODEL_FILLER,
    GEMINI_USER_FILLER,
    GEMINI_FALLBACK_PROMPT,
    GEMINI_SAFETY_THRESHOLDS,
)
from ..core.models import ChatMessage, GeminiConversion, GeminiTurn

logger = logging.getLogger(__name__)


def _gemini_role(role: str) -> str:
    return GEMINI_MODEL_ROLE if role == "assistant" else GEMINI_USER_ROLE


def _filler_turn(repeated_role: str) -> GeminiTurn:
    """Tour inséré entre deux tours consécutifs du même rôle."""
    if repeated_role == GEMINI_USER_ROLE:
        return GeminiTurn.text(GEMINI_MODEL_ROLE, GEMINI_MODEL_FILLER)
    return GeminiTurn.text(GEMINI_USER_ROLE, GEMINI_USER_FILLER)


def convert_to_gemini_turns(messages: List[ChatMessage]) -> GeminiConversion:
    """
    Convertit une liste de messages OpenAI en tours Gemini alternés.

    - Les messages system sont retirés (conservés à part dans system_messages)
    - assistant → model, tout le reste → user
    - Deux tours consécutifs du même rôle reçoivent un tour de remplissage
      ("Okay." côté model, "Understood." côté user)
    - Si la liste est vide ou ne commence pas par un tour user, elle est
      remplacée par un unique tour user: le dernier message user de
      l'entrée, ou "Hello"

    Args:
        messages: Messages de la requête, dans l'ordre

    Returns:
        GeminiConversion (tours + indicateurs de réparation)
    """
    turns: List[GeminiTurn] = []
    system_messages: List[str] = []
    kept = 0
    previous_role = None

    for message in messages:
        if message.role == "system":
            system_messages.append(message.content)
            continue

        role = _gemini_role(message.role)
        if role == previous_role:
            turns.append(_filler_turn(role))
        turns.append(GeminiTurn.text(role, message.content))
        previous_role = role
        kept += 1

    if system_messages:
        logger.debug(f"[GEMINI] {len(system_messages)} message(s) system retiré(s) de l'historique")

    if turns and turns[0].role == GEMINI_USER_ROLE:
        return GeminiConversion(turns=turns, system_messages=system_messages)

    user_messages = [m.content for m in messages if m.role == "user"]
    fallback_text = user_messages[-1] if user_messages else GEMINI_FALLBACK_PROMPT
    discarded = kept - (1 if user_messages else 0)

    logger.warning(
        f"[GEMINI] Historique non alterné réparé: {discarded} message(s) écarté(s), "
        f"{kept} message(s) conservable(s) sur {len(messages)}"
    )

    return GeminiConversion(
        turns=[GeminiTurn.text(GEMINI_USER_ROLE, fallback_text)],
        system_messages=system_messages,
        repaired=True,
        discarded=discarded
    )


def build_safety_settings() -> List[Dict[str, str]]:
    """
    Seuils de sécurité fixes envoyés à chaque appel Gemini.

    Returns:
        Liste de {category, threshold}
    """
    return [
        {"category": category, "threshold": threshold}
        for category, threshold in GEMINI_SAFETY_THRESHOLDS
    ]

"""
Authentification de l'appelant (session cookie).
"""

from .session import SessionResolver, get_session_resolver

__all__ = [
    "SessionResolver",
    "get_session_resolver",
]

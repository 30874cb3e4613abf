"""
Routes API par domaine.
"""

from . import chat
from . import health
from . import providers

__all__ = [
    "chat",
    "health",
    "providers",
]

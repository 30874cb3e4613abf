"""
Configuration de Chat Relay.
"""

from .loader import load_config, clear_config_cache
from .settings import Settings, RelayConfig, SessionConfig, ProviderConfig

__all__ = [
    "load_config",
    "clear_config_cache",
    "Settings",
    "RelayConfig",
    "SessionConfig",
    "ProviderConfig",
]

"""
Dataclasses pour la configuration.
"""
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from ..core.constants import (
    DEFAULT_REQUEST_TIMEOUT_S,
    DEFAULT_SESSION_COOKIE,
    DEFAULT_SESSION_SALT,
    DEFAULT_SESSION_MAX_AGE_S,
    SUPPORTED_PROVIDERS,
)


@dataclass
class RelayConfig:
    """Timeouts et limites de connexion vers les providers."""
    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S
    connect_timeout_s: float = 10.0
    max_connections: int = 50
    max_keepalive_connections: int = 20

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RelayConfig":
        """Crée une instance depuis un dictionnaire."""
        return cls(
            request_timeout_s=float(data.get("request_timeout_s", DEFAULT_REQUEST_TIMEOUT_S)),
            connect_timeout_s=float(data.get("connect_timeout_s", 10.0)),
            max_connections=int(data.get("max_connections", 50)),
            max_keepalive_connections=int(data.get("max_keepalive_connections", 20))
        )


@dataclass
class SessionConfig:
    """Configuration du cookie de session signé."""
    secret: str = ""
    cookie_name: str = DEFAULT_SESSION_COOKIE
    salt: str = DEFAULT_SESSION_SALT
    max_age_s: int = DEFAULT_SESSION_MAX_AGE_S

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """Crée une instance depuis un dictionnaire."""
        return cls(
            secret=data.get("secret", ""),
            cookie_name=data.get("cookie_name", DEFAULT_SESSION_COOKIE),
            salt=data.get("salt", DEFAULT_SESSION_SALT),
            max_age_s=int(data.get("max_age_s", DEFAULT_SESSION_MAX_AGE_S))
        )


@dataclass
class ProviderConfig:
    """Configuration d'un provider LLM."""
    key: str
    api_key: str = ""
    base_url: Optional[str] = None
    default_model: Optional[str] = None
    models: List[str] = field(default_factory=list)
    # Gemini uniquement: transmet les messages system comme system_instruction
    system_instruction: bool = False

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_dict(cls, key: str, data: Dict[str, Any]) -> "ProviderConfig":
        """Crée une instance depuis un dictionnaire."""
        return cls(
            key=key,
            api_key=data.get("api_key", ""),
            base_url=data.get("base_url") or None,
            default_model=data.get("default_model") or None,
            models=list(data.get("models", [])),
            system_instruction=bool(data.get("system_instruction", False))
        )


@dataclass
class Settings:
    """Configuration globale de l'application."""
    relay: RelayConfig = field(default_factory=RelayConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    providers: Dict[str, ProviderConfig] = field(default_factory=dict)
    cors_origins: List[str] = field(default_factory=list)
    log_level: str = "INFO"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Settings":
        """
        Crée une instance depuis la configuration chargée.

        Seuls les providers supportés sont retenus; une section absente
        donne un provider non configuré.
        """
        providers_config = config.get("providers", {})
        providers = {
            key: ProviderConfig.from_dict(key, providers_config.get(key, {}))
            for key in SUPPORTED_PROVIDERS
        }

        return cls(
            relay=RelayConfig.from_dict(config.get("relay", {})),
            session=SessionConfig.from_dict(config.get("session", {})),
            providers=providers,
            cors_origins=list(config.get("server", {}).get("cors_origins", [])),
            log_level=str(config.get("logging", {}).get("level", "INFO")).upper()
        )

    def get_provider(self, key: str) -> Optional[ProviderConfig]:
        """Récupère un provider par sa clé."""
        return self.providers.get(key)

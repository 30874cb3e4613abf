"""
Exceptions personnalisées pour Chat Relay.

Chaque exception porte le statut HTTP et le message renvoyés au client;
le contexte (champ, provider, modèle) reste dans `details` pour les logs.
"""


class ChatRelayError(Exception):
    """Exception de base pour toutes les erreurs du relais."""

    status_code = 500
    code = "relay_error"

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = {key: value for key, value in details.items() if value is not None}

    def __str__(self):
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"

    def to_response(self) -> dict:
        """Corps JSON renvoyé au client."""
        return {"message": self.message}


class ConfigurationError(ChatRelayError):
    """Configuration inutilisable (fichier absent, TOML invalide, secret manquant)."""

    code = "config_error"

    def __init__(self, message: str, config_key: str = None):
        super().__init__(message, key=config_key)


class AuthenticationError(ChatRelayError):
    """Session absente, invalide ou sans identifiant utilisateur."""

    status_code = 401
    code = "unauthorized"

    def __init__(self, reason: str = None):
        super().__init__("Unauthorized", reason=reason)


class RequestValidationError(ChatRelayError):
    """Body de requête invalide (un champ manquant ou malformé)."""

    status_code = 400
    code = "validation_error"

    def __init__(self, message: str, field: str = None):
        super().__init__(message, field=field)
        self.field = field


class UnsupportedProviderError(ChatRelayError):
    """Valeur de modelProvider inconnue."""

    status_code = 400
    code = "invalid_provider"

    def __init__(self, provider: str = None):
        super().__init__("Invalid modelProvider", provider=provider)


class ProviderError(ChatRelayError):
    """Provider connu mais inutilisable (pas de clé API)."""

    status_code = 503
    code = "provider_error"

    def __init__(self, message: str, provider: str = None):
        super().__init__(message, provider=provider)


class TokenizationError(ChatRelayError):
    """Échec du comptage de tokens (estimation loggée uniquement)."""

    code = "tokenization_error"

    def __init__(self, message: str, content_preview: str = None):
        super().__init__(message, preview=content_preview[:100] if content_preview else None)


class StreamingError(ChatRelayError):
    """
    Échec du provider après l'envoi des en-têtes de réponse.

    Le statut ne peut plus être transmis au client: l'exception sert à
    interrompre le stream HTTP.
    """

    status_code = 502
    code = "streaming_error"

    def __init__(
        self,
        message: str,
        provider: str = None,
        model: str = None,
        error_type: str = None,
        chunks_relayed: int = 0
    ):
        super().__init__(
            message,
            provider=provider,
            model=model,
            error_type=error_type,
            chunks_relayed=chunks_relayed
        )
        self.error_type = error_type
        self.chunks_relayed = chunks_relayed

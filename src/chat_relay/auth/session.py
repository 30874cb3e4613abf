"""
Résolution de la session appelante depuis un cookie signé.

Le cookie est émis par l'application hôte (même secret, même salt);
le relais ne fait que le lire et le vérifier.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import Request
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from ..config.settings import SessionConfig
from ..core.exceptions import ConfigurationError
from ..core.models import SessionInfo

logger = logging.getLogger(__name__)


class SessionResolver:
    """
    Vérifie le cookie de session et en extrait l'identité de l'appelant.

    Payload attendu: {"user": {"id": ..., "email": ..., "name": ...}, "expires": ...}
    """

    def __init__(self, config: SessionConfig):
        if not config.secret:
            raise ConfigurationError(
                message="Secret de session manquant",
                config_key="session.secret"
            )
        self.cookie_name = config.cookie_name
        self.max_age_s = config.max_age_s
        self._serializer = URLSafeTimedSerializer(config.secret, salt=config.salt)

    def sign(self, payload: Dict[str, Any]) -> str:
        """Signe un payload de session (valeur du cookie)."""
        return self._serializer.dumps(payload)

    def load(self, token: str) -> Optional[SessionInfo]:
        """
        Vérifie un jeton de session.

        Args:
            token: Valeur brute du cookie

        Returns:
            SessionInfo si le jeton est valide et porte un user.id, None sinon
        """
        try:
            payload = self._serializer.loads(token, max_age=self.max_age_s)
        except SignatureExpired:
            logger.debug("[SESSION] Cookie expiré")
            return None
        except BadSignature:
            logger.debug("[SESSION] Signature de cookie invalide")
            return None

        if not isinstance(payload, dict):
            return None
        user = payload.get("user")
        if not isinstance(user, dict):
            return None

        user_id = user.get("id")
        if user_id is None or not str(user_id).strip():
            return None

        return SessionInfo(
            user_id=str(user_id),
            email=user.get("email"),
            name=user.get("name"),
            expires=payload.get("expires")
        )

    def resolve(self, request: Request) -> Optional[SessionInfo]:
        """Résout la session depuis les cookies de la requête."""
        token = request.cookies.get(self.cookie_name)
        if not token:
            return None
        return self.load(token)


def get_session_resolver(request: Request) -> SessionResolver:
    """Dépendance FastAPI: résolveur injecté au démarrage de l'application."""
    return request.app.state.session_resolver

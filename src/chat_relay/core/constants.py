"""
Constantes globales pour Chat Relay.
"""

# ============================================================================
# PROVIDERS
# ============================================================================
PROVIDER_OPENAI = "openai"
PROVIDER_GEMINI = "gemini"
SUPPORTED_PROVIDERS = (PROVIDER_OPENAI, PROVIDER_GEMINI)

PROVIDER_DISPLAY_NAMES = {
    PROVIDER_OPENAI: "OpenAI",
    PROVIDER_GEMINI: "Google Gemini",
}

# ============================================================================
# REQUÊTE
# ============================================================================
MESSAGE_ROLES = ("system", "user", "assistant")
DEFAULT_REQUEST_TIMEOUT_S = 30.0

# ============================================================================
# GEMINI
# ============================================================================
GEMINI_USER_ROLE = "user"
GEMINI_MODEL_ROLE = "model"

# Tours de remplissage pour rétablir l'alternance user/model
GEMINI_MODEL_FILLER = "Okay."
GEMINI_USER_FILLER = "Understood."
GEMINI_FALLBACK_PROMPT = "Hello"

# Seuils de sécurité fixes (catégorie, seuil) appliqués à chaque appel
GEMINI_SAFETY_THRESHOLDS = (
    ("HARM_CATEGORY_HARASSMENT", "BLOCK_MEDIUM_AND_ABOVE"),
    ("HARM_CATEGORY_HATE_SPEECH", "BLOCK_MEDIUM_AND_ABOVE"),
    ("HARM_CATEGORY_SEXUALLY_EXPLICIT", "BLOCK_MEDIUM_AND_ABOVE"),
    ("HARM_CATEGORY_DANGEROUS_CONTENT", "BLOCK_MEDIUM_AND_ABOVE"),
)

# ============================================================================
# SESSION
# ============================================================================
DEFAULT_SESSION_COOKIE = "chat_relay_session"
DEFAULT_SESSION_SALT = "chat-relay-session"
DEFAULT_SESSION_MAX_AGE_S = 30 * 24 * 3600

# ============================================================================
# ERREURS
# ============================================================================
GENERIC_ERROR_MESSAGE = "Error processing chat completion"

STREAMING_ERROR_TYPES = {
    "upstream_error": "Erreur renvoyée par le provider pendant le stream",
    "connection_error": "Connexion au provider interrompue",
    "timeout_error": "Timeout lors de la lecture du stream",
    "unknown": "Erreur streaming inconnue"
}

# ============================================================================
# HEADERS DE RÉPONSE
# ============================================================================
HEADER_PROVIDER = "X-Chat-Provider"
HEADER_MODEL = "X-Chat-Model"
HEADER_HISTORY_REPAIRED = "X-Chat-History-Repaired"
HEADER_HISTORY_DISCARDED = "X-Chat-History-Discarded"

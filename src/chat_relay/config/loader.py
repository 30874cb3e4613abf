"""src.chat_relay.config.loader

Lecture de config.toml.

Les chaînes "${VAR}" sont remplacées par la variable d'environnement VAR
(chaîne vide si elle est absente): un provider dont la clé n'est pas
exportée est simplement "non configuré".

Note d'architecture:
- Le package `config/` ne dépend que de `core/`.
"""
import os
import re
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.exceptions import ConfigurationError

CONFIG_ENV_VAR = "CHAT_RELAY_CONFIG"

_ENV_REFERENCE = re.compile(r"\$\{([^}]+)\}")

# Fichier par défaut, lu une seule fois
_default_config: Optional[Dict[str, Any]] = None


def substitute_env(value: Any) -> Any:
    """Remplace les références ${VAR} dans les chaînes, tables et listes."""
    if isinstance(value, str):
        return _ENV_REFERENCE.sub(lambda ref: os.environ.get(ref.group(1), ""), value)
    if isinstance(value, dict):
        return {key: substitute_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [substitute_env(item) for item in value]
    return value


def resolve_config_path() -> Path:
    """
    Fichier de configuration par défaut.

    Priorité: variable CHAT_RELAY_CONFIG, puis config.toml à la racine du
    projet (parent de src/).
    """
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    # project/src/chat_relay/config/loader.py
    return Path(__file__).resolve().parents[3] / "config.toml"


def read_config(path: Path) -> Dict[str, Any]:
    """
    Lit un fichier TOML et substitue les variables d'environnement.

    Args:
        path: Fichier à lire

    Returns:
        Tables du fichier, variables substituées

    Raises:
        ConfigurationError: Fichier absent ou TOML invalide
    """
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise ConfigurationError(
            message=f"Fichier de configuration introuvable: {path}",
            config_key="config_path"
        ) from e

    try:
        tables = tomllib.loads(raw.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            message=f"{path} n'est pas un TOML valide: {e}",
            config_key="config_path"
        ) from e

    return substitute_env(tables)


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Configuration de l'application.

    Un chemin explicite est relu à chaque appel; le fichier par défaut
    n'est lu qu'au premier appel.
    """
    global _default_config

    if config_path is not None:
        return read_config(Path(config_path))

    if _default_config is None:
        _default_config = read_config(resolve_config_path())
    return _default_config


def clear_config_cache() -> None:
    """Oublie le fichier par défaut déjà lu (tests, changement de CHAT_RELAY_CONFIG)."""
    global _default_config
    _default_config = None

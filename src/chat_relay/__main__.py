"""
Point d'entrée pour `python -m chat_relay`.
"""
import argparse
import os

import uvicorn

from .config.loader import CONFIG_ENV_VAR


def main():
    """Fonction principale."""
    parser = argparse.ArgumentParser(description="Chat Relay")
    parser.add_argument("--host", default="0.0.0.0", help="Host (défaut: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port (défaut: 8000)")
    parser.add_argument("--reload", action="store_true", help="Activer le reload auto")
    parser.add_argument("--config", default=None, help="Chemin du config.toml")

    args = parser.parse_args()

    # Transmis via l'environnement: la factory est rappelée par chaque worker/reload
    if args.config:
        os.environ[CONFIG_ENV_VAR] = os.path.abspath(args.config)

    print(f"🚀 Démarrage de Chat Relay sur {args.host}:{args.port}")

    uvicorn.run(
        "chat_relay.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload
    )


if __name__ == "__main__":
    main()

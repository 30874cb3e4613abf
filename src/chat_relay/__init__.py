"""
Chat Relay - relais de chat authentifié vers OpenAI et Gemini, en streaming.
"""

__version__ = "1.0.0"

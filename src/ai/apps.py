from django.apps import AppConfig


class AiConfig(AppConfig):
    """Text summarisation helpers backed by the Gemini API."""

    name = "ai"

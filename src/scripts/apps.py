from django.apps import AppConfig


class ScriptsConfig(AppConfig):
    """Holds operational management commands such as ``seed_nuggets``."""

    name = "scripts"

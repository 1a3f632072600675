"""App configuration for nugget collections."""

from django.apps import AppConfig


class NuggetCollectionsConfig(AppConfig):
    """Collections group articles into public or private, followable lists."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "nugget_collections"

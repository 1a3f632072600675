"""App configuration for tags and categories."""

from django.apps import AppConfig


class TagsConfig(AppConfig):
    """Tags app holds the Tag model shared by articles as categories."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "tags"

"""App configuration for moderation and admin statistics."""

from django.apps import AppConfig


class ModerationConfig(AppConfig):
    """Moderation app holds reports, their audit trail, and the admin dashboard stats."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "moderation"

"""App configuration for user management endpoints."""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    """Users app exposes profiles, admin listing, and the personalised feed."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "users"

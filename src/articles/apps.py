"""App configuration for nugget articles."""

from django.apps import AppConfig


class ArticlesConfig(AppConfig):
    """Articles app holds nuggets, their visibility rules, and batch publishing."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "articles"

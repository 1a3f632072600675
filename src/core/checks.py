"""System checks for permission configuration."""

from django.core.checks import Error, register

from core.permissions import IsOwnerOrAdmin


def _owner_checked_views():
    # Imported lazily: the view modules import models that need the app registry.
    from articles.views import ArticleViewSet
    from nugget_collections.views import CollectionViewSet
    from users.views import UserViewSet

    return [ArticleViewSet, CollectionViewSet, UserViewSet]


@register()
def owner_views_declare_owner_field(app_configs, **kwargs):
    """Ensure views protected by IsOwnerOrAdmin declare an owner_field attribute."""
    errors: list[Error] = []

    for view_cls in _owner_checked_views():
        permission_classes = getattr(view_cls, "permission_classes", [])
        if IsOwnerOrAdmin in permission_classes and not getattr(view_cls, "owner_field", None):
            errors.append(
                Error(
                    f"{view_cls.__name__} uses IsOwnerOrAdmin but does not define owner_field.",
                    obj=view_cls,
                    id="core.E001",
                )
            )

    return errors

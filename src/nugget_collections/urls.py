"""Routing for the Collection viewset."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import CollectionViewSet

router = DefaultRouter()
router.include_root_view = False
router.register(r"collections", CollectionViewSet, basename="collection")

urlpatterns = [
    path("", include(router.urls)),
]

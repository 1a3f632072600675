"""Routing for the Article viewset and batch publishing."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import ArticleViewSet, BatchPublishView

router = DefaultRouter()
router.include_root_view = False
router.register(r"articles", ArticleViewSet, basename="article")

urlpatterns = [
    path("", include(router.urls)),
    path("batch/publish/", BatchPublishView.as_view(), name="batch-publish"),
]

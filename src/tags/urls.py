"""Routing for category/tag endpoints."""

from django.urls import path

from .views import TagDetailView, TagListView

urlpatterns = [
    path("categories/", TagListView.as_view(), name="tag-list"),
    path("categories/<str:key>/", TagDetailView.as_view(), name="tag-detail"),
]

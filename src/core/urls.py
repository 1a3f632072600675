"""Root URL configuration for the Nuggets API."""
from django.contrib import admin
from django.urls import include, path, re_path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from core.views import HealthView, api_not_found

api_patterns = [
    path("health/", HealthView.as_view(), name="health"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="docs"),
    path("auth/", include("authentication.urls")),
    path("", include("users.urls")),
    path("", include("articles.urls")),
    path("", include("nugget_collections.urls")),
    path("", include("tags.urls")),
    path("", include("feedback.urls")),
    path("", include("moderation.urls")),
    path("", include("legal.urls")),
    path("", include("unfurl.urls")),
    path("", include("ai.urls")),
    re_path(r"^.*$", api_not_found),
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include(api_patterns)),
]

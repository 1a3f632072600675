from django.urls import path

from .views import LegalPageDetailView, LegalPageListView

urlpatterns = [
    path("legal/", LegalPageListView.as_view(), name="legal-list"),
    path("legal/<slug:slug>/", LegalPageDetailView.as_view(), name="legal-detail"),
]

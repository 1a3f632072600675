from django.urls import path

from .views import UnfurlView

urlpatterns = [
    path("unfurl/", UnfurlView.as_view(), name="unfurl"),
]

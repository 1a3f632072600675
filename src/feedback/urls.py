from django.urls import path

from .views import FeedbackDetailView, FeedbackListView, FeedbackStatusView

urlpatterns = [
    path("feedback/", FeedbackListView.as_view(), name="feedback-list"),
    path("feedback/<int:pk>/", FeedbackDetailView.as_view(), name="feedback-detail"),
    path("feedback/<int:pk>/status/", FeedbackStatusView.as_view(), name="feedback-status"),
]

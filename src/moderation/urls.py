"""Routes for reports, reported content, and the admin dashboard."""

from django.urls import path

from .models import ModerationAuditLog
from .views import AdminStatsView, ReportActionView, ReportAuditLogView, ReportedContentView, ReportListView

urlpatterns = [
    path("moderation/reports/", ReportListView.as_view(), name="report-list"),
    path(
        "moderation/reports/<int:pk>/resolve/",
        ReportActionView.as_view(transition=ModerationAuditLog.Action.RESOLVE),
        name="report-resolve",
    ),
    path(
        "moderation/reports/<int:pk>/dismiss/",
        ReportActionView.as_view(transition=ModerationAuditLog.Action.DISMISS),
        name="report-dismiss",
    ),
    path("moderation/reports/<int:pk>/audit/", ReportAuditLogView.as_view(), name="report-audit"),
    path(
        "moderation/content/<str:target_type>/<str:target_id>/",
        ReportedContentView.as_view(),
        name="reported-content",
    ),
    path("admin/stats/", AdminStatsView.as_view(), name="admin-stats"),
]

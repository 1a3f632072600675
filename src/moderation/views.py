"""Moderation endpoints: reports, their resolution workflow, and admin stats."""

import logging

from django.db.models import Q
from django.http import Http404
from rest_framework import status

from articles.serializers import ArticleSerializer
from authentication.serializers import UserSerializer
from core.pagination import PageLimitPagination
from core.permissions import IsAdmin
from core.response import BaseAPIView, api_response, error_response
from nugget_collections.serializers import CollectionSerializer
from .models import ModerationAuditLog, Report
from .serializers import AuditLogSerializer, ReportActionSerializer, ReportCreateSerializer, ReportSerializer
from .services import create_report, get_reported_content, transition_report
from .stats import get_admin_stats

logger = logging.getLogger(__name__)

CONTENT_SERIALIZERS = {
    Report.TargetType.NUGGET: ArticleSerializer,
    Report.TargetType.USER: UserSerializer,
    Report.TargetType.COLLECTION: CollectionSerializer,
}


class ReportListView(BaseAPIView):
    """Anyone may file a report; only admins may list them."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAdmin()]
        return []

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        params = request.query_params
        queryset = Report.objects.all()

        report_status = params.get("status") or Report.Status.OPEN
        if report_status != "all":
            queryset = queryset.filter(status=report_status)
        target_type = params.get("targetType")
        if target_type:
            queryset = queryset.filter(target_type=target_type)
        target_id = params.get("targetId")
        if target_id:
            queryset = queryset.filter(target_id=target_id)
        q = (params.get("q") or "").strip()
        if q:
            queryset = queryset.filter(
                Q(reason__icontains=q)
                | Q(description__icontains=q)
                | Q(reporter_name__icontains=q)
                | Q(respondent_name__icontains=q)
                | Q(target_id__icontains=q)
            )

        paginator = PageLimitPagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        return paginator.get_paginated_response(ReportSerializer(page, many=True).data)

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        serializer = ReportCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        report = create_report(serializer.validated_data, request.user)
        return api_response(ReportSerializer(report).data, status=status.HTTP_201_CREATED)


class ReportActionView(BaseAPIView):
    """Resolve or dismiss a report; bound to one action per route."""

    permission_classes = [IsAdmin]
    transition: str = ModerationAuditLog.Action.RESOLVE

    def post(self, request, pk: int):
        return self._apply(request, pk)

    def patch(self, request, pk: int):
        return self._apply(request, pk)

    def _apply(self, request, pk: int):
        serializer = ReportActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        report = transition_report(
            pk, self.transition, request.user, serializer.validated_data.get("actionReason")
        )
        return api_response(ReportSerializer(report).data)


class ReportAuditLogView(BaseAPIView):
    """Audit trail of one report, newest first."""

    permission_classes = [IsAdmin]

    # noinspection PyMethodMayBeStatic
    def get(self, request, pk: int):
        if not Report.objects.filter(pk=pk).exists():
            raise Http404("Report not found")
        entries = ModerationAuditLog.objects.filter(report_id=pk)
        return api_response(AuditLogSerializer(entries, many=True).data)


class ReportedContentView(BaseAPIView):
    """Fetch the object behind a report regardless of its visibility."""

    permission_classes = [IsAdmin]

    # noinspection PyMethodMayBeStatic
    def get(self, request, target_type: str, target_id: str):
        serializer_class = CONTENT_SERIALIZERS.get(target_type)
        if serializer_class is None:
            return error_response([f"Invalid target type: {target_type}"], status.HTTP_400_BAD_REQUEST)

        content = get_reported_content(target_type, target_id)
        summary = {"targetType": target_type, "targetId": target_id}
        if content is None:
            return error_response(
                [f"The {target_type} with ID {target_id} was not found. It may have been deleted."],
                status.HTTP_404_NOT_FOUND,
                data={"exists": False, "deleted": True, **summary},
            )
        return api_response(
            {"content": serializer_class(content).data, "exists": True, "deleted": False, **summary}
        )


class AdminStatsView(BaseAPIView):
    permission_classes = [IsAdmin]

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        return api_response(get_admin_stats())


__all__ = ["ReportListView", "ReportActionView", "ReportAuditLogView", "ReportedContentView", "AdminStatsView"]

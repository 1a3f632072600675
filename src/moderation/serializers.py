"""Serializers for reports and report status transitions."""

from rest_framework import serializers

from core.serializers import StrictFieldsMixin
from .models import ModerationAuditLog, Report


class PartySerializer(serializers.Serializer):
    """Id/name snapshot of a reporter or respondent."""

    id = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=150)


class ReportSerializer(serializers.ModelSerializer):
    """Read payload for a report."""

    id = serializers.CharField(read_only=True)
    targetId = serializers.CharField(source="target_id", read_only=True)
    targetType = serializers.CharField(source="target_type", read_only=True)
    reporter = serializers.SerializerMethodField()
    respondent = serializers.SerializerMethodField()
    actionedBy = serializers.SerializerMethodField()
    resolvedAt = serializers.DateTimeField(source="resolved_at", read_only=True)
    dismissedAt = serializers.DateTimeField(source="dismissed_at", read_only=True)
    actionReason = serializers.CharField(source="action_reason", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Report
        fields = [
            "id",
            "targetId",
            "targetType",
            "reason",
            "description",
            "reporter",
            "respondent",
            "status",
            "actionedBy",
            "resolvedAt",
            "dismissedAt",
            "actionReason",
            "createdAt",
        ]
        read_only_fields = fields

    @staticmethod
    def get_reporter(report) -> dict[str, str]:
        return {"id": report.reporter_id, "name": report.reporter_name}

    @staticmethod
    def get_respondent(report) -> dict[str, str] | None:
        if not report.respondent_id:
            return None
        return {"id": report.respondent_id, "name": report.respondent_name}

    @staticmethod
    def get_actionedBy(report) -> str | None:  # noqa: N802
        return str(report.actioned_by_id) if report.actioned_by_id else None


class ReportCreateSerializer(StrictFieldsMixin, serializers.Serializer):
    targetId = serializers.CharField(max_length=64)
    targetType = serializers.ChoiceField(choices=Report.TargetType.choices)
    reason = serializers.ChoiceField(choices=Report.Reason.choices)
    description = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    reporter = PartySerializer(required=False)
    respondent = PartySerializer(required=False, allow_null=True)


class ReportActionSerializer(StrictFieldsMixin, serializers.Serializer):
    actionReason = serializers.CharField(max_length=500, required=False, allow_blank=True)


class AuditLogSerializer(serializers.ModelSerializer):
    reportId = serializers.CharField(source="report_id", read_only=True)
    performedBy = serializers.SerializerMethodField()
    previousStatus = serializers.CharField(source="previous_status", read_only=True)
    newStatus = serializers.CharField(source="new_status", read_only=True)

    class Meta:
        model = ModerationAuditLog
        fields = ["id", "reportId", "action", "performedBy", "previousStatus", "newStatus", "timestamp", "metadata"]
        read_only_fields = fields

    @staticmethod
    def get_performedBy(entry) -> str | None:  # noqa: N802
        return str(entry.performed_by_id) if entry.performed_by_id else None


__all__ = [
    "PartySerializer",
    "ReportSerializer",
    "ReportCreateSerializer",
    "ReportActionSerializer",
    "AuditLogSerializer",
]

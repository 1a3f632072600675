"""Report creation, the resolve/dismiss workflow, and reported-content lookup."""

import logging
from typing import Any, Optional

from django.db import transaction
from django.http import Http404
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from articles.models import Article
from authentication.models import User
from core.exceptions import Conflict
from core.utils import is_uuid, parse_int_id
from nugget_collections.models import Collection
from .models import ModerationAuditLog, Report

logger = logging.getLogger(__name__)

# action -> (target status, timestamp field)
TRANSITIONS = {
    ModerationAuditLog.Action.RESOLVE: (Report.Status.RESOLVED, "resolved_at"),
    ModerationAuditLog.Action.DISMISS: (Report.Status.DISMISSED, "dismissed_at"),
}


def create_report(data: dict[str, Any], user) -> Report:
    """Create an open report.

    When the payload has no ``reporter`` the authenticated caller fills it;
    anonymous callers must name one.
    """
    reporter = data.get("reporter")
    if reporter is None:
        if not getattr(user, "is_authenticated", False):
            raise ValidationError({"reporter": ["This field is required."]})
        reporter = {"id": str(user.pk), "name": user.display_name}
    respondent = data.get("respondent") or {}

    report = Report.objects.create(
        target_id=data["targetId"],
        target_type=data["targetType"],
        reason=data["reason"],
        description=data.get("description", ""),
        reporter_id=reporter["id"],
        reporter_name=reporter["name"],
        respondent_id=respondent.get("id", ""),
        respondent_name=respondent.get("name", ""),
    )
    logger.info("Report %s opened against %s %s", report.pk, report.target_type, report.target_id)
    return report


def transition_report(report_id: int, action: str, actor, action_reason: Optional[str] = None) -> Report:
    """Move an open report to the terminal status ``action`` leads to.

    Repeating the same action on an already-transitioned report returns it
    unchanged; applying the other action is a conflict. Each real transition
    writes one audit row in the same transaction.
    """
    new_status, stamp_field = TRANSITIONS[action]
    with transaction.atomic():
        report = Report.objects.select_for_update().filter(pk=report_id).first()
        if report is None:
            raise Http404("Report not found")
        if report.status == new_status:
            return report
        if report.status != Report.Status.OPEN:
            raise Conflict(f"Report is already {report.status}")

        previous_status = report.status
        report.status = new_status
        report.actioned_by = actor
        setattr(report, stamp_field, timezone.now())
        if action_reason:
            report.action_reason = action_reason
        report.save()

        ModerationAuditLog.objects.create(
            report=report,
            action=action,
            performed_by=actor,
            previous_status=previous_status,
            new_status=new_status,
            metadata={"actionReason": action_reason} if action_reason else {},
        )
    logger.info("Report %s %s by %s", report.pk, new_status, actor.pk)
    return report


def get_reported_content(target_type: str, target_id: str) -> Optional[Any]:
    """Return the object a report points at, ignoring visibility, or None when gone."""
    if target_type == Report.TargetType.USER:
        return User.objects.filter(pk=target_id).first() if is_uuid(target_id) else None
    pk = parse_int_id(target_id)
    if pk is None:
        return None
    if target_type == Report.TargetType.NUGGET:
        return Article.objects.filter(pk=pk).first()
    return Collection.objects.filter(pk=pk).first()


__all__ = ["TRANSITIONS", "create_report", "transition_report", "get_reported_content"]

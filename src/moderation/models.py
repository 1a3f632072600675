"""Report and ModerationAuditLog models."""

from django.conf import settings
from django.db import models
from django.utils import timezone


class Report(models.Model):
    """A user report against a nugget, user, or collection.

    ``open`` is the only non-terminal status; ``resolved`` and ``dismissed``
    are final. Reporter and respondent are stored as id/name snapshots so a
    report survives deletion of the accounts it mentions.
    """

    class TargetType(models.TextChoices):
        NUGGET = "nugget", "Nugget"
        USER = "user", "User"
        COLLECTION = "collection", "Collection"

    class Reason(models.TextChoices):
        SPAM = "spam", "Spam"
        HARASSMENT = "harassment", "Harassment"
        MISINFORMATION = "misinformation", "Misinformation"
        COPYRIGHT = "copyright", "Copyright"
        OTHER = "other", "Other"

    class Status(models.TextChoices):
        OPEN = "open", "Open"
        RESOLVED = "resolved", "Resolved"
        DISMISSED = "dismissed", "Dismissed"

    target_id = models.CharField(max_length=64, db_index=True)
    target_type = models.CharField(max_length=12, choices=TargetType.choices, db_index=True)
    reason = models.CharField(max_length=20, choices=Reason.choices, db_index=True)
    description = models.CharField(max_length=2000, blank=True)
    reporter_id = models.CharField(max_length=64)
    reporter_name = models.CharField(max_length=150)
    respondent_id = models.CharField(max_length=64, blank=True)
    respondent_name = models.CharField(max_length=150, blank=True)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.OPEN, db_index=True)
    actioned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="actioned_reports"
    )
    resolved_at = models.DateTimeField(null=True, blank=True)
    dismissed_at = models.DateTimeField(null=True, blank=True)
    action_reason = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status", "target_type"], name="report_status_type_idx"),
            models.Index(fields=["target_id", "target_type"], name="report_target_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.target_type}:{self.target_id} ({self.status})"


class ModerationAuditLog(models.Model):
    """Append-only record of one report status transition."""

    class Action(models.TextChoices):
        RESOLVE = "resolve", "Resolve"
        DISMISS = "dismiss", "Dismiss"

    report = models.ForeignKey(Report, on_delete=models.CASCADE, related_name="audit_log")
    action = models.CharField(max_length=10, choices=Action.choices, db_index=True)
    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name="moderation_actions"
    )
    previous_status = models.CharField(max_length=10, choices=Report.Status.choices)
    new_status = models.CharField(max_length=10, choices=Report.Status.choices)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["-timestamp", "-id"]


__all__ = ["Report", "ModerationAuditLog"]

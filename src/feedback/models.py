"""Feedback submitted from the app's feedback form."""

from django.db import models


class Feedback(models.Model):
    class Type(models.TextChoices):
        BUG = "bug", "Bug"
        FEATURE = "feature", "Feature"
        GENERAL = "general", "General"

    class Status(models.TextChoices):
        NEW = "new", "New"
        READ = "read", "Read"
        ARCHIVED = "archived", "Archived"

    content = models.TextField(max_length=5000)
    type = models.CharField(max_length=10, choices=Type.choices, default=Type.GENERAL, db_index=True)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.NEW, db_index=True)
    # Snapshot of the submitter ({id, name, email, avatarUrl}); feedback outlives accounts.
    user = models.JSONField(null=True, blank=True)
    email = models.EmailField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "feedback"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.type} feedback #{self.pk}"

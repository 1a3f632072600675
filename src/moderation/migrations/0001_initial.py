import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [("open", "Open"), ("resolved", "Resolved"), ("dismissed", "Dismissed")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Report",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("target_id", models.CharField(db_index=True, max_length=64)),
                (
                    "target_type",
                    models.CharField(
                        choices=[("nugget", "Nugget"), ("user", "User"), ("collection", "Collection")],
                        db_index=True,
                        max_length=12,
                    ),
                ),
                (
                    "reason",
                    models.CharField(
                        choices=[
                            ("spam", "Spam"),
                            ("harassment", "Harassment"),
                            ("misinformation", "Misinformation"),
                            ("copyright", "Copyright"),
                            ("other", "Other"),
                        ],
                        db_index=True,
                        max_length=20,
                    ),
                ),
                ("description", models.CharField(blank=True, max_length=2000)),
                ("reporter_id", models.CharField(max_length=64)),
                ("reporter_name", models.CharField(max_length=150)),
                ("respondent_id", models.CharField(blank=True, max_length=64)),
                ("respondent_name", models.CharField(blank=True, max_length=150)),
                ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="open", max_length=10)),
                ("resolved_at", models.DateTimeField(blank=True, null=True)),
                ("dismissed_at", models.DateTimeField(blank=True, null=True)),
                ("action_reason", models.CharField(blank=True, max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "actioned_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="actioned_reports",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["status", "target_type"], name="report_status_type_idx"),
                    models.Index(fields=["target_id", "target_type"], name="report_target_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ModerationAuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "action",
                    models.CharField(
                        choices=[("resolve", "Resolve"), ("dismiss", "Dismiss")], db_index=True, max_length=10
                    ),
                ),
                ("previous_status", models.CharField(choices=STATUS_CHOICES, max_length=10)),
                ("new_status", models.CharField(choices=STATUS_CHOICES, max_length=10)),
                ("timestamp", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                (
                    "performed_by",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="moderation_actions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "report",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="audit_log",
                        to="moderation.report",
                    ),
                ),
            ],
            options={
                "ordering": ["-timestamp", "-id"],
            },
        ),
    ]

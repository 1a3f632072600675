import uuid

import authentication.managers
import authentication.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "role",
                    models.CharField(
                        choices=[("admin", "Admin"), ("user", "User")], default="user", max_length=10
                    ),
                ),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("email_verified", models.BooleanField(default=False)),
                (
                    "provider",
                    models.CharField(
                        choices=[("email", "Email"), ("google", "Google"), ("linkedin", "LinkedIn")],
                        default="email",
                        max_length=10,
                    ),
                ),
                ("password_hash", models.CharField(blank=True, max_length=128)),
                ("display_name", models.CharField(max_length=150)),
                ("username", models.CharField(max_length=50, unique=True)),
                ("profile", models.JSONField(blank=True, default=authentication.models.default_profile)),
                ("preferences", models.JSONField(blank=True, default=authentication.models.default_preferences)),
                ("last_login_at", models.DateTimeField(blank=True, null=True)),
                ("last_feed_visit", models.DateTimeField(blank=True, null=True)),
                ("onboarding_completed", models.BooleanField(default=False)),
                ("feature_flags", models.JSONField(blank=True, default=dict)),
                ("is_active", models.BooleanField(default=True)),
                ("token_version", models.PositiveIntegerField(default=1)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
            managers=[
                ("objects", authentication.managers.UserManager()),
            ],
        ),
    ]

import articles.models
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("tags", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Article",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(blank=True, max_length=200)),
                ("excerpt", models.TextField(blank=True)),
                ("content", models.TextField(blank=True)),
                ("tags", models.JSONField(blank=True, default=list)),
                (
                    "visibility",
                    models.CharField(
                        choices=[("public", "Public"), ("private", "Private")],
                        db_index=True,
                        default="public",
                        max_length=10,
                    ),
                ),
                ("media", models.JSONField(blank=True, null=True)),
                ("images", models.JSONField(blank=True, default=list)),
                ("documents", models.JSONField(blank=True, default=list)),
                ("read_time", models.PositiveIntegerField(blank=True, null=True)),
                ("source_type", models.CharField(blank=True, max_length=50)),
                ("engagement", models.JSONField(blank=True, default=articles.models.default_engagement)),
                ("published_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "author",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="articles",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                ("categories", models.ManyToManyField(blank=True, related_name="articles", to="tags.tag")),
            ],
            options={
                "ordering": ["-published_at", "-id"],
                "indexes": [models.Index(fields=["author", "visibility"], name="article_author_visibility_idx")],
            },
        ),
    ]

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Feedback",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content", models.TextField(max_length=5000)),
                (
                    "type",
                    models.CharField(
                        choices=[("bug", "Bug"), ("feature", "Feature"), ("general", "General")],
                        db_index=True,
                        default="general",
                        max_length=10,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("new", "New"), ("read", "Read"), ("archived", "Archived")],
                        db_index=True,
                        default="new",
                        max_length=10,
                    ),
                ),
                ("user", models.JSONField(blank=True, null=True)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                "verbose_name_plural": "feedback",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]

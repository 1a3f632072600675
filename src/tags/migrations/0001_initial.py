from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Tag",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("raw_name", models.CharField(max_length=50)),
                ("canonical_name", models.CharField(max_length=50, unique=True)),
                (
                    "type",
                    models.CharField(
                        choices=[("category", "Category"), ("tag", "Tag")], db_index=True, default="tag", max_length=10
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("pending", "Pending"), ("deprecated", "Deprecated")],
                        db_index=True,
                        default="active",
                        max_length=12,
                    ),
                ),
                ("is_official", models.BooleanField(db_index=True, default=False)),
            ],
            options={
                "ordering": ["raw_name"],
            },
        ),
    ]

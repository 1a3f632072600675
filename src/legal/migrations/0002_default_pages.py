from django.db import migrations

DEFAULT_PAGES = [
    ("about", "About Us", "# About Us\nWe are Nuggets."),
    ("terms", "Terms", "# Terms\nBe nice."),
    ("privacy", "Privacy", "# Privacy\nWe respect it."),
]


def create_default_pages(apps, schema_editor):
    LegalPage = apps.get_model("legal", "LegalPage")
    for slug, title, content in DEFAULT_PAGES:
        LegalPage.objects.get_or_create(slug=slug, defaults={"title": title, "content": content})


def remove_default_pages(apps, schema_editor):
    LegalPage = apps.get_model("legal", "LegalPage")
    LegalPage.objects.filter(slug__in=[slug for slug, _, _ in DEFAULT_PAGES]).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("legal", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(create_default_pages, remove_default_pages),
    ]

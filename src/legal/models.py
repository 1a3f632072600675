"""Static legal pages (about, terms, privacy) editable from the admin site."""

from django.db import models


class LegalPage(models.Model):
    slug = models.SlugField(max_length=50, unique=True)
    title = models.CharField(max_length=200)
    is_enabled = models.BooleanField(default=True)
    content = models.TextField()
    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["slug"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title

"""Tag model: a display name plus its lower-cased canonical form."""

from django.db import models


def canonicalize(name: str) -> str:
    """Return the lookup form of a tag name: trimmed and lower-cased."""
    return (name or "").strip().lower()


class Tag(models.Model):
    """Category or free tag; ``canonical_name`` is unique across all tags."""

    class Type(models.TextChoices):
        CATEGORY = "category", "Category"
        TAG = "tag", "Tag"

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        PENDING = "pending", "Pending"
        DEPRECATED = "deprecated", "Deprecated"

    raw_name = models.CharField(max_length=50)
    canonical_name = models.CharField(max_length=50, unique=True)
    type = models.CharField(max_length=10, choices=Type.choices, default=Type.TAG, db_index=True)
    status = models.CharField(max_length=12, choices=Status.choices, default=Status.ACTIVE, db_index=True)
    is_official = models.BooleanField(default=False, db_index=True)

    class Meta:
        ordering = ["raw_name"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.raw_name

    def save(self, *args, **kwargs):
        self.raw_name = self.raw_name.strip()
        self.canonical_name = canonicalize(self.raw_name)
        super().save(*args, **kwargs)


__all__ = ["Tag", "canonicalize"]

"""Collection and CollectionEntry models."""

from django.conf import settings
from django.db import models


class CollectionQuerySet(models.QuerySet):
    def visible_to(self, user):
        """Public collections, plus the caller's own private ones; admins see everything."""
        if not user or not getattr(user, "is_authenticated", False):
            return self.filter(type=Collection.Type.PUBLIC)
        if getattr(user, "role", None) == "admin":
            return self.all()
        return self.filter(models.Q(type=Collection.Type.PUBLIC) | models.Q(creator=user))


class Collection(models.Model):
    """Named, ordered list of articles owned by its creator."""

    class Type(models.TextChoices):
        PUBLIC = "public", "Public"
        PRIVATE = "private", "Private"

    raw_name = models.CharField(max_length=100)
    canonical_name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True)
    creator = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="collections")
    type = models.CharField(max_length=10, choices=Type.choices, default=Type.PUBLIC)
    followers = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="followed_collections", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CollectionQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["creator", "canonical_name"], name="unique_collection_name_per_creator"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.raw_name

    def save(self, *args, **kwargs):
        self.raw_name = self.raw_name.strip()
        self.canonical_name = self.raw_name.lower()
        super().save(*args, **kwargs)


class CollectionEntry(models.Model):
    """An article placed in a collection; an article appears at most once per collection."""

    collection = models.ForeignKey(Collection, on_delete=models.CASCADE, related_name="entries")
    article = models.ForeignKey("articles.Article", on_delete=models.CASCADE, related_name="collection_entries")
    added_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name="collection_entries"
    )
    added_at = models.DateTimeField(auto_now_add=True)
    flagged_by = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="flagged_entries", blank=True)

    class Meta:
        ordering = ["added_at", "id"]
        constraints = [
            models.UniqueConstraint(fields=["collection", "article"], name="unique_article_per_collection"),
        ]


__all__ = ["Collection", "CollectionEntry", "CollectionQuerySet"]

"""Article ("nugget") model with per-article visibility."""

from django.conf import settings
from django.db import models
from django.utils import timezone


def default_engagement() -> dict:
    return {"likes": 0, "bookmarks": 0, "shares": 0, "views": 0}


class ArticleQuerySet(models.QuerySet):
    def public(self):
        return self.filter(visibility=Article.Visibility.PUBLIC)

    def visible_to(self, user):
        """Public articles, plus the caller's own private ones; admins see everything."""
        if not user or not getattr(user, "is_authenticated", False):
            return self.public()
        if getattr(user, "role", None) == "admin":
            return self.all()
        return self.filter(models.Q(visibility=Article.Visibility.PUBLIC) | models.Q(author=user))

    def ids_with_tag_containing(self, text: str) -> list:
        """Primary keys of articles with a free-form tag containing ``text``, ignoring case."""
        folded = text.casefold()
        return [
            pk
            for pk, tags in self.values_list("pk", "tags")
            if any(folded in str(tag).casefold() for tag in tags or [])
        ]


class Article(models.Model):
    """Short-form post with optional media, images, and documents."""

    class Visibility(models.TextChoices):
        PUBLIC = "public", "Public"
        PRIVATE = "private", "Private"

    title = models.CharField(max_length=200, blank=True)
    excerpt = models.TextField(blank=True)
    content = models.TextField(blank=True)
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="articles")
    categories = models.ManyToManyField("tags.Tag", related_name="articles", blank=True)
    tags = models.JSONField(default=list, blank=True)
    visibility = models.CharField(
        max_length=10, choices=Visibility.choices, default=Visibility.PUBLIC, db_index=True
    )
    media = models.JSONField(null=True, blank=True)
    images = models.JSONField(default=list, blank=True)
    documents = models.JSONField(default=list, blank=True)
    read_time = models.PositiveIntegerField(null=True, blank=True)
    source_type = models.CharField(max_length=50, blank=True)
    engagement = models.JSONField(default=default_engagement, blank=True)
    published_at = models.DateTimeField(default=timezone.now, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ArticleQuerySet.as_manager()

    class Meta:
        ordering = ["-published_at", "-id"]
        indexes = [models.Index(fields=["author", "visibility"], name="article_author_visibility_idx")]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title or f"Article {self.pk}"

    def is_visible_to(self, user) -> bool:
        if self.visibility == self.Visibility.PUBLIC:
            return True
        if not user or not getattr(user, "is_authenticated", False):
            return False
        return getattr(user, "role", None) == "admin" or self.author_id == user.pk


__all__ = ["Article", "ArticleQuerySet", "default_engagement"]

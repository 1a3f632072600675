"""Serializers for nugget articles.

Reads use ``ArticleSerializer``; writes go through ``ArticleWriteSerializer``
which rejects unknown fields and enforces the tag/content requirements.
"""

from typing import Any, Optional

from django.utils import timezone
from rest_framework import serializers

from core.serializers import StrictFieldsMixin
from tags.services import resolve_categories
from .models import Article


class ArticleSerializer(serializers.ModelSerializer):
    """Read payload for an article."""

    id = serializers.CharField(read_only=True)
    author = serializers.SerializerMethodField()
    authorId = serializers.CharField(source="author_id", read_only=True)
    authorName = serializers.CharField(source="author.display_name", read_only=True)
    categories = serializers.SerializerMethodField()
    categoryIds = serializers.SerializerMethodField()
    readTime = serializers.IntegerField(source="read_time", read_only=True)
    sourceType = serializers.CharField(source="source_type", read_only=True)
    publishedAt = serializers.DateTimeField(source="published_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Article
        fields = [
            "id",
            "title",
            "excerpt",
            "content",
            "author",
            "authorId",
            "authorName",
            "categories",
            "categoryIds",
            "tags",
            "visibility",
            "media",
            "images",
            "documents",
            "readTime",
            "sourceType",
            "engagement",
            "publishedAt",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    @staticmethod
    def get_author(article) -> dict[str, str]:
        return {"id": str(article.author_id), "name": article.author.display_name}

    @staticmethod
    def get_categories(article) -> list[str]:
        return [tag.raw_name for tag in article.categories.all()]

    @staticmethod
    def get_categoryIds(article) -> list[str]:  # noqa: N802
        return [str(tag.pk) for tag in article.categories.all()]


class MediaSerializer(serializers.Serializer):
    type = serializers.CharField(required=False, allow_blank=True)
    url = serializers.CharField(required=False, allow_blank=True)
    thumbnail_url = serializers.CharField(required=False, allow_blank=True)
    aspect_ratio = serializers.CharField(required=False, allow_blank=True)
    filename = serializers.CharField(required=False, allow_blank=True)
    previewMetadata = serializers.DictField(required=False)
    showInMasonry = serializers.BooleanField(required=False)
    masonryTitle = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=80,
        error_messages={"max_length": "Masonry title must be 80 characters or less"},
    )


class DocumentSerializer(serializers.Serializer):
    title = serializers.CharField()
    url = serializers.CharField()
    type = serializers.CharField()
    size = serializers.CharField()


class ArticleWriteSerializer(StrictFieldsMixin, serializers.Serializer):
    """Validate article create and update payloads.

    On create at least one non-blank tag is required, and at least one of
    ``content``, ``media``, ``images`` or ``documents`` must carry something.
    Updates are partial; the content rule is checked against the merged
    result.
    """

    title = serializers.CharField(required=False, allow_blank=True, max_length=200)
    excerpt = serializers.CharField(required=False, allow_blank=True)
    content = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    category = serializers.CharField(required=False, allow_blank=True)
    categories = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    tags = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    visibility = serializers.ChoiceField(choices=Article.Visibility.choices, required=False)
    media = MediaSerializer(required=False, allow_null=True)
    images = serializers.ListField(child=serializers.CharField(), required=False)
    documents = DocumentSerializer(many=True, required=False)
    readTime = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    sourceType = serializers.CharField(required=False, allow_blank=True, max_length=50)
    source_type = serializers.CharField(required=False, allow_blank=True, max_length=50)
    publishedAt = serializers.DateTimeField(required=False)

    # Accepted for client convenience but always derived server-side.
    ignored_fields = frozenset({"id", "author", "authorId", "authorName", "categoryIds", "createdAt", "updatedAt"})

    @staticmethod
    def validate_tags(value: list[str]) -> list[str]:
        if not value or any(not tag.strip() for tag in value):
            raise serializers.ValidationError("At least one tag is required")
        return [tag.strip() for tag in value]

    def validate(self, attrs):
        instance: Article | None = self.instance
        if instance is None and "tags" not in attrs:
            raise serializers.ValidationError({"tags": ["At least one tag is required"]})

        def current(field: str, attr: str) -> Any:
            if field in attrs:
                return attrs[field]
            return getattr(instance, attr) if instance is not None else None

        has_content = bool((current("content", "content") or "").strip())
        has_media = current("media", "media") is not None
        has_images = bool(current("images", "images"))
        has_documents = bool(current("documents", "documents"))
        if not (has_content or has_media or has_images or has_documents):
            raise serializers.ValidationError(
                {"content": ["Please provide content, a URL, images, or documents"]}
            )
        return attrs

    def _apply(self, article: Article, data: dict[str, Any]) -> Optional[list]:
        for field in ("title", "excerpt", "content", "tags", "visibility", "media", "images", "documents"):
            if field in data:
                setattr(article, field, data[field])
        if "readTime" in data:
            article.read_time = data["readTime"]
        source_type = data.get("sourceType", data.get("source_type"))
        if source_type is not None:
            article.source_type = source_type
        if "publishedAt" in data:
            article.published_at = data["publishedAt"]

        names = list(data.get("categories") or [])
        if data.get("category"):
            names.insert(0, data["category"])
        if "categories" in data or "category" in data:
            return resolve_categories(names)
        return None

    def create(self, validated_data):
        article = Article(author=validated_data.pop("author"), published_at=timezone.now())
        categories = self._apply(article, validated_data)
        article.save()
        if categories:
            article.categories.set(categories)
        return article

    def update(self, instance, validated_data):
        categories = self._apply(instance, validated_data)
        instance.save()
        if categories is not None:
            instance.categories.set(categories)
        return instance


__all__ = ["ArticleSerializer", "ArticleWriteSerializer"]

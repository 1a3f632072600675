"""Serializers for collections and their entries."""

from rest_framework import serializers

from core.serializers import StrictFieldsMixin
from .models import Collection, CollectionEntry


class CollectionEntrySerializer(serializers.ModelSerializer):
    articleId = serializers.CharField(source="article_id", read_only=True)
    addedByUserId = serializers.SerializerMethodField()
    addedAt = serializers.DateTimeField(source="added_at", read_only=True)
    flaggedBy = serializers.SerializerMethodField()

    class Meta:
        model = CollectionEntry
        fields = ["articleId", "addedByUserId", "addedAt", "flaggedBy"]
        read_only_fields = fields

    @staticmethod
    def get_addedByUserId(entry) -> str | None:  # noqa: N802
        return str(entry.added_by_id) if entry.added_by_id else None

    @staticmethod
    def get_flaggedBy(entry) -> list[str]:  # noqa: N802
        return [str(user.pk) for user in entry.flagged_by.all()]


class CollectionSerializer(serializers.ModelSerializer):
    """Read payload for a collection including its ordered entries."""

    id = serializers.CharField(read_only=True)
    name = serializers.CharField(source="raw_name", read_only=True)
    rawName = serializers.CharField(source="raw_name", read_only=True)
    canonicalName = serializers.CharField(source="canonical_name", read_only=True)
    creatorId = serializers.CharField(source="creator_id", read_only=True)
    followers = serializers.SerializerMethodField()
    followersCount = serializers.SerializerMethodField()
    entries = CollectionEntrySerializer(many=True, read_only=True)
    validEntriesCount = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Collection
        fields = [
            "id",
            "name",
            "rawName",
            "canonicalName",
            "description",
            "creatorId",
            "type",
            "followers",
            "followersCount",
            "entries",
            "validEntriesCount",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    @staticmethod
    def get_followers(collection) -> list[str]:
        return [str(user.pk) for user in collection.followers.all()]

    @staticmethod
    def get_followersCount(collection) -> int:  # noqa: N802
        return len(collection.followers.all())

    @staticmethod
    def get_validEntriesCount(collection) -> int:  # noqa: N802
        return len(collection.entries.all())


class CollectionWriteSerializer(StrictFieldsMixin, serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=100)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=Collection.Type.choices, required=False)

    ignored_fields = frozenset({"id", "creatorId", "createdAt", "updatedAt"})

    @staticmethod
    def validate_name(value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value


class EntryCreateSerializer(StrictFieldsMixin, serializers.Serializer):
    articleId = serializers.CharField(min_length=1)

    ignored_fields = frozenset({"userId"})


__all__ = [
    "CollectionEntrySerializer",
    "CollectionSerializer",
    "CollectionWriteSerializer",
    "EntryCreateSerializer",
]

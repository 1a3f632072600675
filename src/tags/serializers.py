"""Serializers for tag listing and tag administration."""

from rest_framework import serializers

from .models import Tag


class TagSerializer(serializers.ModelSerializer):
    """Tag payload; ``usageCount`` comes from the list queryset annotation."""

    name = serializers.CharField(source="raw_name", read_only=True)
    rawName = serializers.CharField(source="raw_name", read_only=True)
    canonicalName = serializers.CharField(source="canonical_name", read_only=True)
    isOfficial = serializers.BooleanField(source="is_official", read_only=True)
    usageCount = serializers.SerializerMethodField()

    class Meta:
        model = Tag
        fields = ["id", "name", "rawName", "canonicalName", "type", "status", "isOfficial", "usageCount"]
        read_only_fields = fields

    @staticmethod
    def get_usageCount(tag) -> int:  # noqa: N802
        count = getattr(tag, "usage_count", None)
        if count is None:
            count = tag.articles.count()
        return count


class TagWriteSerializer(serializers.Serializer):
    """Input for creating or updating a tag."""

    name = serializers.CharField(min_length=1, max_length=50)
    type = serializers.ChoiceField(choices=Tag.Type.choices, required=False)
    status = serializers.ChoiceField(choices=Tag.Status.choices, required=False)
    isOfficial = serializers.BooleanField(required=False)

    @staticmethod
    def validate_name(value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Category name is required")
        return value


__all__ = ["TagSerializer", "TagWriteSerializer"]

from rest_framework import serializers

from .models import LegalPage


class LegalPageSerializer(serializers.ModelSerializer):
    id = serializers.CharField(source="slug", read_only=True)
    isEnabled = serializers.BooleanField(source="is_enabled", read_only=True)
    lastUpdated = serializers.DateTimeField(source="last_updated", read_only=True)

    class Meta:
        model = LegalPage
        fields = ["id", "slug", "title", "isEnabled", "content", "lastUpdated"]
        read_only_fields = fields

"""Serializers for feedback submissions."""

from rest_framework import serializers

from core.serializers import StrictFieldsMixin
from .models import Feedback


class FeedbackUserSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True)
    name = serializers.CharField(required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    avatarUrl = serializers.CharField(required=False, allow_blank=True)


class FeedbackSerializer(serializers.ModelSerializer):
    id = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Feedback
        fields = ["id", "content", "type", "status", "user", "email", "createdAt"]
        read_only_fields = fields


class FeedbackCreateSerializer(StrictFieldsMixin, serializers.Serializer):
    content = serializers.CharField(min_length=1, max_length=5000)
    type = serializers.ChoiceField(choices=Feedback.Type.choices, required=False)
    user = FeedbackUserSerializer(required=False, allow_null=True)
    email = serializers.EmailField(required=False, allow_blank=True)


class FeedbackStatusSerializer(StrictFieldsMixin, serializers.Serializer):
    status = serializers.ChoiceField(choices=Feedback.Status.choices)


__all__ = ["FeedbackSerializer", "FeedbackCreateSerializer", "FeedbackStatusSerializer"]

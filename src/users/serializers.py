"""Serializers for profile updates through ``/api/users/{id}/``."""

from rest_framework import serializers

from authentication.models import AVATAR_COLORS, PROFILE_FIELDS, User
from core.serializers import StrictFieldsMixin

LEGACY_PROFILE_FIELDS = ("bio", "location", "website", "avatarUrl", "title", "company", "twitter", "linkedin")


class ProfileUpdateSerializer(StrictFieldsMixin, serializers.Serializer):
    displayName = serializers.CharField(required=False, min_length=1, max_length=150)
    username = serializers.CharField(required=False, min_length=3, max_length=50)
    avatarColor = serializers.ChoiceField(choices=AVATAR_COLORS, required=False)

    def get_fields(self):
        fields = super().get_fields()
        for name in PROFILE_FIELDS:
            fields.setdefault(name, serializers.CharField(required=False, allow_blank=True))
        return fields

    @staticmethod
    def validate_username(value: str) -> str:
        return value.strip().lower()


class NotificationPreferencesSerializer(StrictFieldsMixin, serializers.Serializer):
    emailDigest = serializers.BooleanField(required=False)
    productUpdates = serializers.BooleanField(required=False)
    newFollowers = serializers.BooleanField(required=False)


class PreferencesUpdateSerializer(StrictFieldsMixin, serializers.Serializer):
    theme = serializers.ChoiceField(choices=["light", "dark", "system"], required=False)
    defaultVisibility = serializers.ChoiceField(choices=["public", "private"], required=False)
    interestedCategories = serializers.ListField(child=serializers.CharField(), required=False)
    compactMode = serializers.BooleanField(required=False)
    richMediaPreviews = serializers.BooleanField(required=False)
    autoFollowCollections = serializers.BooleanField(required=False)
    notifications = NotificationPreferencesSerializer(required=False)


class UserUpdateSerializer(StrictFieldsMixin, serializers.Serializer):
    """Partial user update accepting nested documents and legacy flat fields."""

    name = serializers.CharField(required=False, min_length=1, max_length=150)
    email = serializers.EmailField(required=False)
    role = serializers.ChoiceField(choices=User.Role.choices, required=False)
    profile = ProfileUpdateSerializer(required=False)
    preferences = PreferencesUpdateSerializer(required=False)
    lastFeedVisit = serializers.DateTimeField(required=False)

    ignored_fields = frozenset({"id", "createdAt", "updatedAt"})

    def get_fields(self):
        fields = super().get_fields()
        for name in LEGACY_PROFILE_FIELDS:
            fields[name] = serializers.CharField(required=False, allow_blank=True)
        return fields

    @staticmethod
    def validate_email(value: str) -> str:
        return value.strip().lower()


__all__ = ["UserUpdateSerializer"]

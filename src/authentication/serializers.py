"""Serializers for authentication flows (signup, login) and the user payload."""

import re
from typing import Any, cast

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from core.exceptions import Conflict
from .managers import UserManager

User = get_user_model()

PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter (A-Z)"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter (a-z)"),
    (re.compile(r"[0-9]"), "Password must contain at least one number (0-9)"),
    (re.compile(r"[^A-Za-z0-9]"), "Password must contain at least one special character"),
)


def validate_password_strength(value: str) -> str:
    """Enforce minimum length and character class rules for new passwords."""
    if len(value) < 8:
        raise serializers.ValidationError("Password must be at least 8 characters long")
    for pattern, message in PASSWORD_RULES:
        if not pattern.search(value):
            raise serializers.ValidationError(message)
    return value


def ensure_email_available(email: str, exclude_id=None) -> None:
    """Raise 409 EMAIL_ALREADY_EXISTS when another account owns ``email``."""
    qs = User.objects.filter(email__iexact=email)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if qs.exists():
        raise Conflict("Email already registered", code="EMAIL_ALREADY_EXISTS")


def ensure_username_available(username: str, exclude_id=None) -> None:
    """Raise 409 USERNAME_ALREADY_EXISTS when another account owns ``username``."""
    qs = User.objects.filter(username=username)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if qs.exists():
        raise Conflict("Username already taken", code="USERNAME_ALREADY_EXISTS")


class UserSerializer(serializers.ModelSerializer):
    """Read-only user payload; the password hash never leaves the server."""

    emailVerified = serializers.BooleanField(source="email_verified", read_only=True)
    profile = serializers.SerializerMethodField()
    preferences = serializers.JSONField(read_only=True)
    appState = serializers.SerializerMethodField()
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        """Expose identity, profile documents, and timestamps."""
        model = User
        fields = [
            "id",
            "role",
            "email",
            "emailVerified",
            "provider",
            "profile",
            "preferences",
            "appState",
            "isActive",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    @staticmethod
    def get_profile(user) -> dict[str, Any]:
        profile = dict(user.profile or {})
        profile["displayName"] = user.display_name
        profile["username"] = user.username
        return profile

    @staticmethod
    def get_appState(user) -> dict[str, Any]:  # noqa: N802
        return {
            "lastLoginAt": user.last_login_at.isoformat() if user.last_login_at else None,
            "lastFeedVisit": user.last_feed_visit.isoformat() if user.last_feed_visit else None,
            "onboardingCompleted": user.onboarding_completed,
            "featureFlags": user.feature_flags or {},
        }


class SignupSerializer(serializers.Serializer):
    """Validate and create an ``email`` provider account with the user role."""

    fullName = serializers.CharField(max_length=150)
    username = serializers.CharField(min_length=3, max_length=50)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    phoneNumber = serializers.CharField(required=False, allow_blank=True)
    pincode = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(required=False, allow_blank=True)
    country = serializers.CharField(required=False, allow_blank=True)
    gender = serializers.CharField(required=False, allow_blank=True)

    @staticmethod
    def validate_username(value: str) -> str:
        value = value.strip().lower()
        if len(value) < 3:
            raise serializers.ValidationError("Username must be at least 3 characters")
        return value

    @staticmethod
    def validate_email(value: str) -> str:
        return value.strip().lower()

    @staticmethod
    def validate_password(value: str) -> str:
        return validate_password_strength(value)

    def create(self, validated_data):
        """Create the account after checking email and username availability."""
        ensure_email_available(validated_data["email"])
        ensure_username_available(validated_data["username"])

        profile = {"avatarColor": "blue"}
        for key in ("phoneNumber", "pincode", "city", "country", "gender"):
            if validated_data.get(key):
                profile[key] = validated_data[key]

        manager = cast(UserManager, User.objects)
        try:
            with transaction.atomic():
                return manager.create_user(
                    email=validated_data["email"],
                    password=validated_data["password"],
                    username=validated_data["username"],
                    display_name=validated_data["fullName"].strip(),
                    profile=profile,
                )
        except IntegrityError as exc:
            # A concurrent signup took the email or username after the checks above.
            ensure_email_available(validated_data["email"])
            ensure_username_available(validated_data["username"])
            raise Conflict("Account already exists", code="ACCOUNT_ALREADY_EXISTS") from exc


class LoginSerializer(serializers.Serializer):
    """Authenticate a user via email/password using bcrypt verification."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        """Authenticate credentials and attach the user to validated_data."""
        email = attrs.get("email", "").strip().lower()
        password = attrs.get("password")
        try:
            user = User.objects.get(email=email)
        except User.DoesNotExist:
            raise AuthenticationFailed("Invalid email or password")

        if not user.is_active:
            raise AuthenticationFailed("User is inactive")

        if not UserManager.verify_password(user, password):
            raise AuthenticationFailed("Invalid email or password")

        attrs["user"] = user
        return attrs


__all__ = [
    "UserSerializer",
    "SignupSerializer",
    "LoginSerializer",
    "validate_password_strength",
    "ensure_email_available",
    "ensure_username_available",
]

"""Custom User model with bcrypt-hashed passwords and a two-level role.

The nested ``profile`` / ``preferences`` / ``appState`` documents of the API
map to a few indexed columns (email, username, display name) plus JSON
columns for the long tail of optional attributes.
"""

import uuid
from typing import Optional, ClassVar

from django.contrib.auth.models import AbstractBaseUser
from django.db import models

from .managers import UserManager

PROFILE_FIELDS = (
    "bio",
    "avatarUrl",
    "avatarColor",
    "phoneNumber",
    "location",
    "pincode",
    "city",
    "country",
    "gender",
    "dateOfBirth",
    "website",
    "title",
    "company",
    "twitter",
    "linkedin",
)

AVATAR_COLORS = ("blue", "green", "purple", "amber", "rose", "teal", "indigo", "slate")


def default_profile() -> dict:
    return {"avatarColor": "blue"}


def default_preferences() -> dict:
    """Preferences stored for every new account."""
    return {
        "theme": "system",
        "defaultVisibility": "public",
        "interestedCategories": [],
        "compactMode": False,
        "richMediaPreviews": True,
        "autoFollowCollections": True,
        "notifications": {
            "emailDigest": True,
            "productUpdates": False,
            "newFollowers": True,
        },
    }


class User(AbstractBaseUser):
    """Account identified by email, with a unique lower-cased username."""

    class Role(models.TextChoices):
        ADMIN = "admin", "Admin"
        USER = "user", "User"

    class Provider(models.TextChoices):
        EMAIL = "email", "Email"
        GOOGLE = "google", "Google"
        LINKEDIN = "linkedin", "LinkedIn"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.USER)
    email = models.EmailField(unique=True)
    email_verified = models.BooleanField(default=False)
    provider = models.CharField(max_length=10, choices=Provider.choices, default=Provider.EMAIL)
    password_hash = models.CharField(max_length=128, blank=True)
    display_name = models.CharField(max_length=150)
    username = models.CharField(max_length=50, unique=True)
    profile = models.JSONField(default=default_profile, blank=True)
    preferences = models.JSONField(default=default_preferences, blank=True)
    last_login_at = models.DateTimeField(null=True, blank=True)
    last_feed_visit = models.DateTimeField(null=True, blank=True)
    onboarding_completed = models.BooleanField(default=False)
    feature_flags = models.JSONField(default=dict, blank=True)
    is_active = models.BooleanField(default=True)
    token_version = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS: ClassVar[list[str]] = ["username", "display_name"]

    objects = UserManager()

    class Meta:
        """Default ordering shows newest users first."""
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.email

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN

    # Django admin site integration without the groups/permissions tables.
    @property
    def is_staff(self) -> bool:
        return self.is_active and self.is_admin

    def has_perm(self, perm, obj=None) -> bool:
        return self.is_staff

    def has_module_perms(self, app_label) -> bool:
        return self.is_staff

    @property
    def interested_categories(self) -> list[str]:
        return list((self.preferences or {}).get("interestedCategories") or [])

    def set_password(self, raw_password: Optional[str]) -> None:  # type: ignore[override]
        """Override to ensure bcrypt hashing via manager utility."""

        if raw_password is None:
            self.password_hash = ""
        else:
            self.password_hash = UserManager.hash_password(raw_password)

    def check_password(self, raw_password: Optional[str]) -> bool:  # type: ignore[override]
        """Delegate to bcrypt verification helper."""

        if raw_password is None:
            return False
        return UserManager.verify_password(self, raw_password)


__all__ = ["User", "PROFILE_FIELDS", "AVATAR_COLORS", "default_profile", "default_preferences"]

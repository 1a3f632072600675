"""Profile update and personalised feed logic."""

import logging
from typing import Any

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied

from articles.models import Article
from authentication.models import User
from authentication.serializers import ensure_email_available, ensure_username_available
from core.permissions import is_admin
from tags.models import canonicalize
from .serializers import LEGACY_PROFILE_FIELDS

logger = logging.getLogger(__name__)

FEED_LIMIT = 50


def apply_user_update(user: User, data: dict[str, Any], actor) -> User:
    """Apply a validated ``UserUpdateSerializer`` payload to ``user``.

    Nested ``profile`` keys win over the legacy flat fields; ``preferences``
    and its ``notifications`` block are merged key by key.
    """
    if "role" in data and not is_admin(actor):
        raise PermissionDenied("Only admins can change roles.")

    profile_patch: dict[str, Any] = {k: data[k] for k in LEGACY_PROFILE_FIELDS if k in data}
    profile_patch.update(data.get("profile") or {})

    if "email" in data and data["email"] != user.email:
        ensure_email_available(data["email"], exclude_id=user.pk)
        user.email = data["email"]
    username = profile_patch.pop("username", None)
    if username and username != user.username:
        ensure_username_available(username, exclude_id=user.pk)
        user.username = username

    if "name" in data:
        user.display_name = data["name"]
    if "displayName" in profile_patch:
        user.display_name = profile_patch.pop("displayName")
    if profile_patch:
        user.profile = {**(user.profile or {}), **profile_patch}

    preferences_patch = data.get("preferences")
    if preferences_patch:
        preferences = dict(user.preferences or {})
        notifications = preferences_patch.pop("notifications", None)
        preferences.update(preferences_patch)
        if notifications:
            preferences["notifications"] = {**preferences.get("notifications", {}), **notifications}
        user.preferences = preferences

    if "role" in data:
        user.role = data["role"]
    if "lastFeedVisit" in data:
        user.last_feed_visit = data["lastFeedVisit"]

    user.save()
    return user


def build_feed(user: User) -> dict[str, Any]:
    """Return up to ``FEED_LIMIT`` public articles matching the user's interests.

    Users without interested categories get every public article. ``newCount``
    counts matching articles published after the previous feed visit, and the
    visit time is then moved to now.
    """
    queryset = Article.objects.public()
    categories = [canonicalize(name) for name in user.interested_categories if canonicalize(name)]
    if categories:
        queryset = queryset.filter(categories__canonical_name__in=categories).distinct()

    with transaction.atomic():
        last_visit = user.last_feed_visit
        new_qs = queryset.filter(published_at__gt=last_visit) if last_visit else queryset
        new_count = new_qs.count()
        articles = list(
            queryset.select_related("author").prefetch_related("categories").order_by("-published_at", "-id")[:FEED_LIMIT]
        )
        User.objects.filter(pk=user.pk).update(last_feed_visit=timezone.now())

    return {"articles": articles, "newCount": new_count}


__all__ = ["apply_user_update", "build_feed", "FEED_LIMIT"]

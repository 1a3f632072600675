"""Admin dashboard counters, memoised in a small in-process LRU cache."""

import logging
from typing import Any

from django.db.models import Count, Q
from django.utils import timezone

from articles.models import Article
from authentication.models import User
from core.lru_cache import LRUCache
from feedback.models import Feedback
from .models import Report

logger = logging.getLogger(__name__)

STATS_CACHE_KEY = "admin_stats"
STATS_CACHE_SIZE = 10
STATS_CACHE_TTL_SECONDS = 120

stats_cache = LRUCache(max_size=STATS_CACHE_SIZE, ttl_seconds=STATS_CACHE_TTL_SECONDS)


def compute_stats() -> dict[str, Any]:
    """Count users, nuggets, reports and feedback in one aggregate query per table."""
    start_of_day = timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)

    users = User.objects.aggregate(
        total=Count("id"),
        newToday=Count("id", filter=Q(created_at__gte=start_of_day)),
        admins=Count("id", filter=Q(role=User.Role.ADMIN)),
        active=Count("id", filter=Q(is_active=True)),
        inactive=Count("id", filter=Q(is_active=False)),
    )
    nuggets = Article.objects.aggregate(
        total=Count("id"),
        public=Count("id", filter=Q(visibility=Article.Visibility.PUBLIC)),
        private=Count("id", filter=Q(visibility=Article.Visibility.PRIVATE)),
    )
    open_reports = Report.objects.filter(status=Report.Status.OPEN)
    nuggets["flagged"] = (
        open_reports.filter(target_type=Report.TargetType.NUGGET).values("target_id").distinct().count()
    )
    nuggets["pendingModeration"] = open_reports.count()

    moderation = Report.objects.aggregate(
        total=Count("id"),
        open=Count("id", filter=Q(status=Report.Status.OPEN)),
        resolved=Count("id", filter=Q(status=Report.Status.RESOLVED)),
        dismissed=Count("id", filter=Q(status=Report.Status.DISMISSED)),
    )
    feedback = Feedback.objects.aggregate(
        total=Count("id"),
        new=Count("id", filter=Q(status=Feedback.Status.NEW)),
        read=Count("id", filter=Q(status=Feedback.Status.READ)),
        archived=Count("id", filter=Q(status=Feedback.Status.ARCHIVED)),
    )
    return {
        "users": users,
        "nuggets": nuggets,
        "moderation": moderation,
        "feedback": feedback,
        "generatedAt": timezone.now().isoformat(),
    }


def get_admin_stats() -> dict[str, Any]:
    """Return cached stats when fresh, otherwise recompute and cache them."""
    cached = stats_cache.get(STATS_CACHE_KEY)
    if cached is not None:
        return {**cached, "cached": True}
    stats = compute_stats()
    stats_cache.set(STATS_CACHE_KEY, stats)
    logger.debug("Admin stats recomputed")
    return {**stats, "cached": False}


__all__ = ["stats_cache", "compute_stats", "get_admin_stats"]

"""Collection entry and follower operations."""

import logging

from django.db import IntegrityError, transaction
from django.http import Http404
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied

from articles.models import Article
from core.exceptions import Conflict
from core.permissions import is_admin
from core.utils import parse_int_id
from .models import Collection, CollectionEntry

logger = logging.getLogger(__name__)


DUPLICATE_NAME = "A collection with this name already exists"


def ensure_name_available(creator, name: str, exclude_id=None) -> None:
    """Raise 409 when ``creator`` already has a collection with this canonical name."""
    qs = Collection.objects.filter(creator=creator, canonical_name=name.strip().lower())
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        raise Conflict(DUPLICATE_NAME)


def save_collection(collection: Collection) -> Collection:
    """Insert or update ``collection``; a name taken concurrently is a 409."""
    try:
        with transaction.atomic():
            collection.save()
    except IntegrityError as exc:
        raise Conflict(DUPLICATE_NAME) from exc
    return collection


def _touch(collection: Collection) -> None:
    Collection.objects.filter(pk=collection.pk).update(updated_at=timezone.now())


def _get_visible_article(article_id: str, user) -> Article:
    pk = parse_int_id(article_id)
    article = Article.objects.filter(pk=pk).first() if pk is not None else None
    if article is None or not article.is_visible_to(user):
        raise Http404("Article not found")
    return article


def add_entry(collection: Collection, article_id: str, user) -> CollectionEntry:
    """Add an article to a collection; adding it twice keeps a single entry.

    Public collections accept entries from any signed-in user, private ones
    only from their creator (or an admin).
    """
    if collection.type == Collection.Type.PRIVATE and collection.creator_id != user.pk and not is_admin(user):
        raise PermissionDenied()
    article = _get_visible_article(article_id, user)

    try:
        with transaction.atomic():
            entry, created = CollectionEntry.objects.get_or_create(
                collection=collection, article=article, defaults={"added_by": user}
            )
    except IntegrityError:
        # Lost a race with a concurrent add of the same article.
        entry, created = CollectionEntry.objects.get(collection=collection, article=article), False
    if created:
        _touch(collection)
        logger.info("Article %s added to collection %s by %s", article.pk, collection.pk, user.pk)
    return entry


def remove_entry(collection: Collection, article_id: str, user) -> None:
    """Remove an entry; allowed for the creator, the user who added it, or an admin."""
    entry = CollectionEntry.objects.filter(
        collection=collection, article_id=parse_int_id(article_id)
    ).first()
    if entry is None:
        raise Http404("Entry not found")
    if collection.creator_id != user.pk and entry.added_by_id != user.pk and not is_admin(user):
        raise PermissionDenied()
    entry.delete()
    _touch(collection)


def flag_entry(collection: Collection, article_id: str, user) -> CollectionEntry:
    """Record that ``user`` flagged an entry; repeated flags by the same user are ignored."""
    entry = CollectionEntry.objects.filter(
        collection=collection, article_id=parse_int_id(article_id)
    ).first()
    if entry is None:
        raise Http404("Entry not found")
    entry.flagged_by.add(user)
    return entry


def set_following(collection: Collection, user, follow: bool) -> None:
    if follow:
        collection.followers.add(user)
    else:
        collection.followers.remove(user)


__all__ = ["ensure_name_available", "save_collection", "add_entry", "remove_entry", "flag_entry", "set_following"]

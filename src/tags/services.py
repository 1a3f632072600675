"""Tag lookups shared by articles and the tag admin endpoints."""

import logging
from typing import Iterable

from django.db import transaction

from .models import Tag, canonicalize

logger = logging.getLogger(__name__)


def resolve_categories(names: Iterable[str]) -> list[Tag]:
    """Map category display names to Tag rows, creating missing ones.

    Names are de-duplicated by canonical form while keeping input order.
    New rows are official, active categories.
    """
    tags: list[Tag] = []
    seen: set[str] = set()
    for name in names:
        canonical = canonicalize(name)
        if not canonical or canonical in seen:
            continue
        seen.add(canonical)
        tag, created = Tag.objects.get_or_create(
            canonical_name=canonical,
            defaults={"raw_name": name.strip(), "type": Tag.Type.CATEGORY, "is_official": True},
        )
        if created:
            logger.info("Created category %r while saving an article", tag.raw_name)
        tags.append(tag)
    return tags


def find_tag(key: str) -> Tag | None:
    """Find a tag by numeric id, exact raw name, or canonical name."""
    if key.isdigit():
        tag = Tag.objects.filter(pk=int(key)).first()
        if tag is not None:
            return tag
    return (
        Tag.objects.filter(raw_name=key).first()
        or Tag.objects.filter(canonical_name=canonicalize(key)).first()
    )


def replace_tag_in_articles(old_name: str, new_name: str) -> int:
    """Rewrite free-form article tags equal to ``old_name`` (case-insensitive).

    Returns the number of articles changed.
    """
    from articles.models import Article

    old_canonical = canonicalize(old_name)
    updated = 0
    with transaction.atomic():
        # Compared per element: the stored JSON text escapes non-ASCII characters.
        for article in Article.objects.select_for_update().only("id", "tags"):
            tags = list(article.tags or [])
            if not any(canonicalize(t) == old_canonical for t in tags):
                continue
            article.tags = [new_name if canonicalize(t) == old_canonical else t for t in tags]
            article.save(update_fields=["tags"])
            updated += 1
    logger.info("Renamed tag %r to %r in %d articles", old_name, new_name, updated)
    return updated


__all__ = ["resolve_categories", "find_tag", "replace_tag_in_articles"]

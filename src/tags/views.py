"""Category/tag endpoints under ``/api/categories/``."""

import logging
from typing import Any

from django.db import transaction
from django.db.models import Count
from django.http import Http404
from rest_framework import status
from rest_framework.response import Response

from core.exceptions import Conflict
from core.pagination import PageLimitPagination
from core.permissions import IsAdmin, IsAuthenticated
from core.response import BaseAPIView, api_response
from .models import Tag, canonicalize
from .serializers import TagSerializer, TagWriteSerializer
from .services import find_tag, replace_tag_in_articles

logger = logging.getLogger(__name__)


class TagListView(BaseAPIView):
    """List tags in one of three formats, or create a tag.

    ``format=simple`` returns active tag names, ``format=full`` active tag
    objects with usage counts, and the default admin view every tag.
    """

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated()]
        return []

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        fmt = request.query_params.get("format")
        queryset = Tag.objects.order_by("raw_name", "id")
        if fmt in ("simple", "full"):
            paginator = PageLimitPagination(default_limit=100, max_limit=500)
            queryset = queryset.filter(status=Tag.Status.ACTIVE)
        else:
            paginator = PageLimitPagination()

        if fmt == "simple":
            page = paginator.paginate_queryset(queryset, request, view=self)
            return paginator.get_paginated_response([tag.raw_name for tag in page])

        queryset = queryset.annotate(usage_count=Count("articles", distinct=True))
        page = paginator.paginate_queryset(queryset, request, view=self)
        return paginator.get_paginated_response(TagSerializer(page, many=True).data)

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Create a tag, or return the existing one with the same canonical name."""
        serializer = TagWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        tag_type = data.get("type", Tag.Type.TAG)

        existing = Tag.objects.filter(canonical_name=canonicalize(data["name"])).first()
        if existing is not None:
            return api_response(TagSerializer(existing).data, status=status.HTTP_200_OK)

        tag = Tag.objects.create(
            raw_name=data["name"],
            type=tag_type,
            status=data.get("status", Tag.Status.ACTIVE),
            is_official=data.get("isOfficial", tag_type == Tag.Type.CATEGORY),
        )
        logger.info("Created %s %r", tag.type, tag.raw_name)
        return api_response(TagSerializer(tag).data, status=status.HTTP_201_CREATED)


class TagDetailView(BaseAPIView):
    """Admin-only rename/update by id and delete by id or name."""

    permission_classes = [IsAdmin]

    def put(self, request, key: str):
        return self._update(request, key)

    def patch(self, request, key: str):
        return self._update(request, key)

    # noinspection PyMethodMayBeStatic
    def delete(self, request, key: str):
        tag = find_tag(key)
        if tag is None:
            raise Http404("Category not found")
        logger.info("Deleting tag %r", tag.raw_name)
        tag.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    # noinspection PyMethodMayBeStatic
    def _update(self, request, key: str):
        tag = Tag.objects.filter(pk=int(key)).first() if key.isdigit() else None
        if tag is None:
            raise Http404("Tag not found")

        serializer = TagWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        old_name = tag.raw_name
        with transaction.atomic():
            if "name" in data:
                canonical = canonicalize(data["name"])
                if Tag.objects.filter(canonical_name=canonical).exclude(pk=tag.pk).exists():
                    raise Conflict("A tag with this name already exists")
                tag.raw_name = data["name"]
            if "type" in data:
                tag.type = data["type"]
            if "status" in data:
                tag.status = data["status"]
            if "isOfficial" in data:
                tag.is_official = data["isOfficial"]
            tag.save()

            if tag.raw_name != old_name:
                replace_tag_in_articles(old_name, tag.raw_name)

        return api_response(TagSerializer(tag).data)


__all__ = ["TagListView", "TagDetailView"]

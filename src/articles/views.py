"""Article endpoints: visibility-aware CRUD and batch publishing."""

import logging

from django.db.models import Q
from django.utils import timezone
from rest_framework import serializers, status

from core.pagination import PageLimitPagination
from core.permissions import IsAuthenticated, IsOwnerOrAdmin, is_admin
from core.response import BaseAPIView, BaseViewSet, api_response
from core.utils import is_uuid, parse_int_id
from tags.models import canonicalize
from .models import Article
from .serializers import ArticleSerializer, ArticleWriteSerializer

logger = logging.getLogger(__name__)


class ArticleViewSet(BaseViewSet):
    """CRUD over articles the caller is allowed to see.

    Private articles of other users behave as if they do not exist (404).
    Writes are limited to the author or an admin.
    """

    serializer_class = ArticleSerializer
    permission_classes = [IsOwnerOrAdmin]
    pagination_class = PageLimitPagination
    owner_field = "author"
    http_method_names = ["get", "post", "put", "patch", "delete", "head", "options"]

    def get_queryset(self):
        queryset = (
            Article.objects.visible_to(self.request.user)
            .select_related("author")
            .prefetch_related("categories")
        )
        if self.action != "list":
            return queryset

        params = self.request.query_params
        author_id = params.get("authorId")
        if author_id:
            if not is_uuid(author_id):
                return queryset.none()
            queryset = queryset.filter(author_id=author_id)
        category = params.get("category")
        if category:
            queryset = queryset.filter(categories__canonical_name=canonicalize(category))
        visibility = params.get("visibility")
        if visibility in Article.Visibility.values:
            queryset = queryset.filter(visibility=visibility)
        q = (params.get("q") or "").strip()
        if q:
            tagged = Article.objects.visible_to(self.request.user).ids_with_tag_containing(q)
            queryset = queryset.filter(
                Q(title__icontains=q) | Q(excerpt__icontains=q) | Q(content__icontains=q) | Q(pk__in=tagged)
            )
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = ArticleWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        article = serializer.save(author=request.user)
        logger.info("Article %s created by %s", article.pk, request.user.pk)
        return api_response(ArticleSerializer(article).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        article = self.get_object()
        serializer = ArticleWriteSerializer(article, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        article = serializer.save()
        return api_response(ArticleSerializer(article).data)

    def perform_destroy(self, instance):
        logger.info("Article %s deleted by %s", instance.pk, self.request.user.pk)
        instance.delete()


class BatchPublishSerializer(serializers.Serializer):
    ids = serializers.ListField(
        child=serializers.CharField(min_length=1),
        min_length=1,
        max_length=100,
        error_messages={
            "min_length": "At least one ID is required",
            "max_length": "Maximum 100 items per batch",
        },
    )


class BatchPublishView(BaseAPIView):
    """Set visibility to public on up to 100 articles at once."""

    permission_classes = [IsAuthenticated]

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        serializer = BatchPublishSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ids = {parse_int_id(raw) for raw in serializer.validated_data["ids"]} - {None}
        if not ids:
            raise serializers.ValidationError("No valid nugget IDs provided")

        queryset = Article.objects.filter(pk__in=ids).exclude(visibility=Article.Visibility.PUBLIC)
        if not is_admin(request.user):
            queryset = queryset.filter(author=request.user)
        updated = queryset.update(visibility=Article.Visibility.PUBLIC, updated_at=timezone.now())
        logger.info("Batch publish by %s: %d of %d requested", request.user.pk, updated, len(ids))
        return api_response({"updatedCount": updated, "requestedCount": len(ids)})


__all__ = ["ArticleViewSet", "BatchPublishView"]

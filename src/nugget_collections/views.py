"""Collection endpoints: CRUD, entries, flags, and follows."""

import logging

from django.db.models import Prefetch, Q
from rest_framework import status
from rest_framework.decorators import action

from core.pagination import PageLimitPagination
from core.permissions import IsAuthenticated, IsOwnerOrAdmin
from core.response import BaseViewSet, api_response
from core.utils import is_uuid
from .models import Collection, CollectionEntry
from .serializers import CollectionSerializer, CollectionWriteSerializer, EntryCreateSerializer
from . import services

logger = logging.getLogger(__name__)

ENTRY_ACTIONS = {"add_entry", "remove_entry", "flag_entry", "follow"}


class CollectionViewSet(BaseViewSet):
    """Collections visible to the caller; private ones of other users are 404."""

    serializer_class = CollectionSerializer
    permission_classes = [IsOwnerOrAdmin]
    pagination_class = PageLimitPagination
    owner_field = "creator"
    http_method_names = ["get", "post", "put", "patch", "delete", "head", "options"]

    def get_permissions(self):
        if self.action in ENTRY_ACTIONS:
            return [IsAuthenticated()]
        return super().get_permissions()

    def get_queryset(self):
        queryset = Collection.objects.visible_to(self.request.user).prefetch_related(
            "followers",
            Prefetch("entries", queryset=CollectionEntry.objects.prefetch_related("flagged_by")),
        )
        if self.action != "list":
            return queryset

        params = self.request.query_params
        collection_type = params.get("type")
        if collection_type in Collection.Type.values:
            queryset = queryset.filter(type=collection_type)
        creator_id = params.get("creatorId")
        if creator_id:
            queryset = queryset.filter(creator_id=creator_id) if is_uuid(creator_id) else queryset.none()
        q = (params.get("q") or "").strip()
        if q:
            queryset = queryset.filter(Q(raw_name__icontains=q) | Q(description__icontains=q))
        return queryset

    def _respond(self, collection, status_code=status.HTTP_200_OK):
        collection = self.get_queryset().get(pk=collection.pk)
        return api_response(CollectionSerializer(collection).data, status=status_code)

    def create(self, request, *args, **kwargs):
        serializer = CollectionWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        services.ensure_name_available(request.user, data["name"])
        collection = Collection(
            raw_name=data["name"],
            description=data.get("description", ""),
            type=data.get("type", Collection.Type.PUBLIC),
            creator=request.user,
        )
        services.save_collection(collection)
        logger.info("Collection %s created by %s", collection.pk, request.user.pk)
        return self._respond(collection, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        collection = self.get_object()
        serializer = CollectionWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        if "name" in data:
            services.ensure_name_available(collection.creator, data["name"], exclude_id=collection.pk)
            collection.raw_name = data["name"]
        if "description" in data:
            collection.description = data["description"]
        if "type" in data:
            collection.type = data["type"]
        services.save_collection(collection)
        return self._respond(collection)

    @action(detail=True, methods=["post"], url_path="entries")
    def add_entry(self, request, pk=None):
        collection = self.get_object()
        serializer = EntryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.add_entry(collection, serializer.validated_data["articleId"], request.user)
        return self._respond(collection)

    @action(detail=True, methods=["delete"], url_path=r"entries/(?P<article_id>[^/.]+)")
    def remove_entry(self, request, pk=None, article_id=None):
        collection = self.get_object()
        services.remove_entry(collection, article_id, request.user)
        return self._respond(collection)

    @action(detail=True, methods=["post"], url_path=r"entries/(?P<article_id>[^/.]+)/flag")
    def flag_entry(self, request, pk=None, article_id=None):
        collection = self.get_object()
        services.flag_entry(collection, article_id, request.user)
        return self._respond(collection)

    @action(detail=True, methods=["post", "delete"])
    def follow(self, request, pk=None):
        collection = self.get_object()
        services.set_following(collection, request.user, follow=request.method == "POST")
        return self._respond(collection)


__all__ = ["CollectionViewSet"]

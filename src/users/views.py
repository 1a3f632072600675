"""User endpoints: admin listing, profile read/update/delete, personalised feed."""

import logging

from django.db.models import Q
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied

from articles.serializers import ArticleSerializer
from authentication.models import User
from authentication.serializers import UserSerializer
from core.pagination import PageLimitPagination
from core.permissions import IsAdmin, IsAuthenticated, IsOwnerOrAdmin, is_admin
from core.response import BaseViewSet, api_response
from .serializers import UserUpdateSerializer
from .services import apply_user_update, build_feed

logger = logging.getLogger(__name__)


class UserViewSet(BaseViewSet):
    """Profiles are readable by any signed-in user and writable by self or admin."""

    queryset = User.objects.all()
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    pagination_class = PageLimitPagination
    owner_field = "pk"
    http_method_names = ["get", "put", "patch", "delete", "head", "options"]

    def get_permissions(self):
        if self.action == "list":
            return [IsAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        queryset = User.objects.order_by("-created_at")
        q = (self.request.query_params.get("q") or "").strip()
        if self.action == "list" and q:
            queryset = queryset.filter(
                Q(display_name__icontains=q) | Q(username__icontains=q) | Q(email__icontains=q)
            )
        return queryset

    def update(self, request, *args, **kwargs):
        user = self.get_object()
        serializer = UserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = apply_user_update(user, dict(serializer.validated_data), actor=request.user)
        return api_response(UserSerializer(user).data)

    def perform_destroy(self, instance):
        logger.info("User %s deleted by %s", instance.pk, self.request.user.pk)
        instance.delete()

    @action(detail=True, methods=["get"])
    def feed(self, request, pk=None):
        """Personalised feed for the given user (self or admin only)."""
        user = self.get_object()
        if user.pk != request.user.pk and not is_admin(request.user):
            raise PermissionDenied()
        feed = build_feed(user)
        return api_response(
            {"articles": ArticleSerializer(feed["articles"], many=True).data, "newCount": feed["newCount"]}
        )


__all__ = ["UserViewSet"]

"""Feedback endpoints: public submission and admin triage."""

import logging

from django.http import Http404
from rest_framework import status
from rest_framework.response import Response

from core.pagination import PageLimitPagination
from core.permissions import IsAdmin
from core.response import BaseAPIView, api_response
from .models import Feedback
from .serializers import FeedbackCreateSerializer, FeedbackSerializer, FeedbackStatusSerializer

logger = logging.getLogger(__name__)


def _get_feedback(pk: int) -> Feedback:
    feedback = Feedback.objects.filter(pk=pk).first()
    if feedback is None:
        raise Http404("Feedback not found")
    return feedback


class FeedbackListView(BaseAPIView):
    """Anyone may submit feedback; admins list it newest first."""

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAdmin()]
        return []

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        queryset = Feedback.objects.all()
        feedback_status = request.query_params.get("status")
        if feedback_status:
            queryset = queryset.filter(status=feedback_status)
        feedback_type = request.query_params.get("type")
        if feedback_type:
            queryset = queryset.filter(type=feedback_type)

        paginator = PageLimitPagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        return paginator.get_paginated_response(FeedbackSerializer(page, many=True).data)

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        serializer = FeedbackCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = data.get("user")
        caller = request.user
        if not user and getattr(caller, "is_authenticated", False):
            user = {
                "id": str(caller.pk),
                "name": caller.display_name,
                "email": caller.email,
                "avatarUrl": (caller.profile or {}).get("avatarUrl", ""),
            }
        feedback = Feedback.objects.create(
            content=data["content"],
            type=data.get("type", Feedback.Type.GENERAL),
            user=dict(user) if user else None,
            email=data.get("email") or (user or {}).get("email", ""),
        )
        logger.info("Feedback %s (%s) submitted", feedback.pk, feedback.type)
        return api_response(FeedbackSerializer(feedback).data, status=status.HTTP_201_CREATED)


class FeedbackDetailView(BaseAPIView):
    permission_classes = [IsAdmin]

    # noinspection PyMethodMayBeStatic
    def delete(self, request, pk: int):
        _get_feedback(pk).delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class FeedbackStatusView(BaseAPIView):
    permission_classes = [IsAdmin]

    # noinspection PyMethodMayBeStatic
    def patch(self, request, pk: int):
        feedback = _get_feedback(pk)
        serializer = FeedbackStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        feedback.status = serializer.validated_data["status"]
        feedback.save(update_fields=["status"])
        return api_response(FeedbackSerializer(feedback).data)


__all__ = ["FeedbackListView", "FeedbackDetailView", "FeedbackStatusView"]

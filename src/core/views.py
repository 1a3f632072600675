"""Operational endpoints: health probe and the JSON 404 for unknown API paths."""

import logging
from typing import Any

from django.db import DatabaseError, connection
from django.http import JsonResponse
from rest_framework import status

from core.response import BaseAPIView, api_response, error_response

logger = logging.getLogger(__name__)


class HealthView(BaseAPIView):
    """Report process and database health for load balancers."""

    permission_classes: list[Any] = []
    authentication_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
        except DatabaseError as exc:
            logger.error("Health check failed: %s", exc)
            return error_response(
                ["Database unavailable."],
                status.HTTP_503_SERVICE_UNAVAILABLE,
                data={"status": "error", "database": "disconnected"},
            )
        return api_response({"status": "ok", "database": "connected"})


def api_not_found(request, *args, **kwargs) -> JsonResponse:
    """Answer unknown ``/api/`` paths with the error envelope instead of HTML."""
    return JsonResponse(
        {"data": None, "errors": [f"API endpoint not found: {request.method} {request.path}"]},
        status=status.HTTP_404_NOT_FOUND,
    )


__all__ = ["HealthView", "api_not_found"]

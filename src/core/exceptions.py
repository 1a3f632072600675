"""Custom exception handling to enforce the API error envelope."""

import logging
from typing import Any

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed, NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from authentication.services import BlocklistUnavailable

logger = logging.getLogger(__name__)


class Conflict(APIException):
    """The request clashes with the current state of the resource (409)."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with the current state of the resource."
    default_code = "conflict"

    def __init__(self, detail=None, code=None):
        super().__init__(detail, code)
        # Machine-readable code (e.g. EMAIL_ALREADY_EXISTS) surfaced next to the message.
        self.error_code = code


class ServiceUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Service temporarily unavailable."
    default_code = "service_unavailable"


class BadGateway(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Upstream service failed."
    default_code = "bad_gateway"


def _normalize_errors(payload: Any) -> list[Any]:
    """Convert DRF's response.data into a list for the envelope."""

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "detail" in payload:
        # Common DRF pattern: {"detail": "..."}
        return [payload["detail"]]
    return [payload]


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Wrap DRF errors in `{ "data": null, "errors": [...] }` shape.

    - Uses DRF's default handler to produce the base response.
    - Normalizes common auth/permission messages.
    - Optionally exposes more detailed auth errors when DEBUG_AUTH_ERRORS is enabled.
    - Turns anything unclassified into a logged 500 with a generic message.
    """

    # Blocklist connectivity errors are security-critical and must fail-closed with 503.
    if isinstance(exc, BlocklistUnavailable):
        logger.error("Token blocklist unavailable: %s", exc)
        return Response(
            {"data": None, "errors": ["Authentication service unavailable (blocklist)."]},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    # Treat database errors as a temporary service outage and still respect the
    # global envelope format instead of returning Django's HTML 500 page.
    if isinstance(exc, DatabaseError):
        logger.error("Database error: %s", exc)
        return Response(
            {"data": None, "errors": ["Service temporarily unavailable."]},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    response = drf_exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception("Unhandled error in %s", type(view).__name__ if view else "view", exc_info=exc)
        return Response(
            {"data": None, "errors": ["Internal server error"]},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    # Normalize auth-related status codes to 401, regardless of DRF's default
    # mapping, so that AuthenticationFailed/NotAuthenticated consistently
    # produce 401 responses.
    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    if response.status_code >= 400:
        base_errors = response.data

        if response.status_code == status.HTTP_401_UNAUTHORIZED:
            if getattr(settings, "DEBUG_AUTH_ERRORS", False):
                errors = _normalize_errors(base_errors)
            else:
                errors = [
                    "Authentication credentials were not provided or are invalid, "
                    "token revoked, or user is inactive."
                ]
        elif response.status_code == status.HTTP_403_FORBIDDEN:
            errors = [
                "You do not have permission to perform this action on this resource."
            ]
        else:
            errors = _normalize_errors(base_errors)

        body: dict[str, Any] = {"data": None, "errors": errors}
        if isinstance(exc, Conflict) and exc.error_code:
            body["code"] = exc.error_code
        response.data = body

    return response


__all__ = ["Conflict", "ServiceUnavailable", "BadGateway", "custom_exception_handler"]

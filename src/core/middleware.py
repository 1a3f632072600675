"""Middleware for request ids, body size limits, and JWT authentication."""

import logging
import time
import uuid

from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed

from authentication.services import BEARER_PREFIX, BlocklistUnavailable, TokenService, bearer_token
from core.logging import reset_request_id, set_request_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware:
    """Tag each request with an id and warn about slow requests.

    The id comes from an incoming ``X-Request-ID`` header when the client sent
    one, otherwise a fresh UUID is generated. It is exposed as ``request.id``,
    bound to the logging context, and echoed back in the response header.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.id = request_id[:64]
        token = set_request_id(request.id)
        started = time.monotonic()
        try:
            response = self.get_response(request)
            elapsed_ms = (time.monotonic() - started) * 1000
            if elapsed_ms > settings.SLOW_REQUEST_MS:
                logger.warning(
                    "Slow request %s %s took %.0fms (status %s)",
                    request.method,
                    request.path,
                    elapsed_ms,
                    response.status_code,
                )
            response[REQUEST_ID_HEADER] = request.id
            return response
        finally:
            reset_request_id(token)


class BodySizeLimitMiddleware(MiddlewareMixin):
    """Reject requests whose declared body exceeds MAX_REQUEST_BODY_BYTES."""

    def process_request(self, request):  # type: ignore[override]
        try:
            content_length = int(request.META.get("CONTENT_LENGTH") or 0)
        except ValueError:
            content_length = 0
        if content_length > settings.MAX_REQUEST_BODY_BYTES:
            logger.warning("Rejected %s %s: body of %d bytes", request.method, request.path, content_length)
            return JsonResponse(
                {"data": None, "errors": ["Request body too large."]},
                status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )
        return None


class JWTAuthMiddleware(MiddlewareMixin):
    """Attach the user behind a bearer access token to ``request.user``.

    Requests without a bearer header stay anonymous. A presented token that
    is invalid, expired, revoked, outdated by logout-all, or owned by an
    inactive user ends the request with 401. An unreachable revocation list
    or database ends it with 503.
    """

    def process_request(self, request):  # type: ignore[override]
        if not request.META.get("HTTP_AUTHORIZATION", "").startswith(BEARER_PREFIX):
            request.user = AnonymousUser()
            return None

        try:
            request.user = TokenService.authenticate(bearer_token(request) or "")
        except AuthenticationFailed as exc:
            logger.debug("Rejected bearer token on %s: %s", request.path, exc.detail)
            return _unauthorized()
        except BlocklistUnavailable:
            logger.error("Token revocation list unavailable")
            return _service_unavailable("Authentication service unavailable (blocklist).")
        except DatabaseError as exc:
            logger.error("Database error while authenticating: %s", exc)
            return _service_unavailable("Service temporarily unavailable.")
        return None


def _unauthorized() -> JsonResponse:
    return JsonResponse(
        {
            "data": None,
            "errors": [
                "Authentication credentials were not provided or are invalid, token revoked, or user is inactive."
            ],
        },
        status=status.HTTP_401_UNAUTHORIZED,
    )


def _service_unavailable(message: str) -> JsonResponse:
    return JsonResponse(
        {"data": None, "errors": [message]},
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


__all__ = ["RequestIdMiddleware", "BodySizeLimitMiddleware", "JWTAuthMiddleware"]

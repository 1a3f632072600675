"""Envelope helpers shared by every view.

Successful bodies look like ``{"data": ..., "errors": []}``; failures carry
``data`` (usually null) next to a non-empty ``errors`` list. Paginated lists
add their counters at the top level, beside ``data``.
"""

from typing import Any, Optional

from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import ModelViewSet


def api_response(data: Any, status: int = 200) -> Response:
    """Wrap ``data`` in a success envelope."""
    return Response({"data": data, "errors": []}, status=status)


def error_response(errors: list[Any], status: int, data: Optional[Any] = None) -> Response:
    """Build a failure envelope for views that answer an error without raising."""
    return Response({"data": data, "errors": errors}, status=status)


def is_enveloped(payload: Any) -> bool:
    return isinstance(payload, dict) and "data" in payload and "errors" in payload


class EnvelopeMixin:
    """Wrap bare successful payloads (e.g. from generic viewset actions)."""

    def finalize_response(self, request, response, *args, **kwargs):  # type: ignore[override]
        status_code = getattr(response, "status_code", None)
        if status_code and status_code < 400 and status_code != 204 and hasattr(response, "data"):
            if not is_enveloped(response.data):
                response.data = {"data": response.data, "errors": []}
        return super().finalize_response(request, response, *args, **kwargs)  # type: ignore[attr-defined]


class BaseAPIView(EnvelopeMixin, APIView):
    pass


class BaseViewSet(EnvelopeMixin, ModelViewSet):
    pass


__all__ = ["api_response", "error_response", "is_enveloped", "BaseAPIView", "BaseViewSet"]

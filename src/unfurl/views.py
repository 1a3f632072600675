"""POST /api/unfurl/: link preview metadata for a pasted URL."""

import logging
from typing import Any
from urllib.parse import urlsplit

from rest_framework.exceptions import ValidationError

from core.response import BaseAPIView, api_response
from core.throttling import ConfigurableScopedRateThrottle
from .serializers import UnfurlRequestSerializer
from .services import fetch_url_metadata
from .ssrf import ALLOWED_SCHEMES, is_url_safe_for_fetch

logger = logging.getLogger(__name__)


class UnfurlView(BaseAPIView):
    """Return preview metadata for a public http(s) URL."""

    permission_classes: list[Any] = []
    throttle_classes = [ConfigurableScopedRateThrottle]
    throttle_scope = "unfurl"

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        serializer = UnfurlRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        url = serializer.validated_data["url"]

        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise ValidationError({"url": ["URL format is invalid"]})
        if parts.scheme.lower() not in ALLOWED_SCHEMES:
            raise ValidationError({"url": ["Only http and https URLs are allowed"]})
        safe, reason = is_url_safe_for_fetch(url)
        if not safe:
            logger.warning("Refused to unfurl %s: %s", url, reason)
            raise ValidationError({"url": [reason]})

        return api_response(fetch_url_metadata(url))


__all__ = ["UnfurlView"]

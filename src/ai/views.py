"""AI helper endpoints used by the nugget composer."""

import logging

from rest_framework import serializers

from core.exceptions import BadGateway, ServiceUnavailable
from core.permissions import IsAuthenticated
from core.response import BaseAPIView, api_response
from .client import GeminiError, GeminiNotConfigured
from .services import generate_takeaways, summarize_text

logger = logging.getLogger(__name__)


class TextSerializer(serializers.Serializer):
    text = serializers.CharField(error_messages={"required": "Text is required", "blank": "Text is required"})


class _GeminiView(BaseAPIView):
    permission_classes = [IsAuthenticated]

    def run(self, text: str):
        raise NotImplementedError

    def post(self, request):
        serializer = TextSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            return api_response(self.run(serializer.validated_data["text"]))
        except GeminiNotConfigured:
            raise ServiceUnavailable("AI service is not configured.")
        except GeminiError:
            logger.exception("AI request by %s failed", request.user.pk)
            raise BadGateway("AI service failed to generate a response.")


class SummarizeView(_GeminiView):
    def run(self, text: str):
        return summarize_text(text)


class TakeawaysView(_GeminiView):
    def run(self, text: str):
        return {"takeaways": generate_takeaways(text)}


__all__ = ["SummarizeView", "TakeawaysView"]

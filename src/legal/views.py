"""Public, read-only legal pages."""

from django.http import Http404

from core.response import BaseAPIView, api_response
from .models import LegalPage
from .serializers import LegalPageSerializer


class LegalPageListView(BaseAPIView):
    authentication_classes: list = []
    permission_classes: list = []

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        pages = LegalPage.objects.filter(is_enabled=True)
        return api_response(LegalPageSerializer(pages, many=True).data)


class LegalPageDetailView(BaseAPIView):
    """A single enabled page; disabled pages look missing."""

    authentication_classes: list = []
    permission_classes: list = []

    # noinspection PyMethodMayBeStatic
    def get(self, request, slug: str):
        page = LegalPage.objects.filter(slug=slug, is_enabled=True).first()
        if page is None:
            raise Http404("Page not found")
        return api_response(LegalPageSerializer(page).data)


__all__ = ["LegalPageListView", "LegalPageDetailView"]

"""Page/limit pagination producing the paginated list envelope."""

from typing import Any, Optional

from rest_framework.pagination import BasePagination
from rest_framework.response import Response


def _parse_int(raw: Optional[str], default: int) -> int:
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


class PageLimitPagination(BasePagination):
    """Paginate with ``page`` (1-based) and ``limit`` query parameters.

    ``page`` is clamped to at least 1 and ``limit`` to ``1..max_limit``.
    The response carries ``total``, ``page``, ``limit`` and ``hasMore`` next
    to the usual ``data`` / ``errors`` keys.
    """

    default_limit = 25
    max_limit = 100

    def __init__(self, default_limit: Optional[int] = None, max_limit: Optional[int] = None):
        if default_limit is not None:
            self.default_limit = default_limit
        if max_limit is not None:
            self.max_limit = max_limit
        self.page = 1
        self.limit = self.default_limit
        self.total = 0

    def get_page_params(self, request) -> tuple[int, int]:
        page = max(1, _parse_int(request.query_params.get("page"), 1))
        limit = _parse_int(request.query_params.get("limit"), self.default_limit)
        limit = min(max(1, limit), self.max_limit)
        return page, limit

    def paginate_queryset(self, queryset, request, view=None):
        self.page, self.limit = self.get_page_params(request)
        self.total = len(queryset) if isinstance(queryset, list) else queryset.count()
        offset = (self.page - 1) * self.limit
        if offset >= self.total:
            return []
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response(self, data) -> Response:
        return Response(self.build_payload(data))

    def build_payload(self, data: Any) -> dict[str, Any]:
        return {
            "data": data,
            "errors": [],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "hasMore": self.page * self.limit < self.total,
        }

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "data": schema,
                "errors": {"type": "array", "items": {}},
                "total": {"type": "integer"},
                "page": {"type": "integer"},
                "limit": {"type": "integer"},
                "hasMore": {"type": "boolean"},
            },
        }


__all__ = ["PageLimitPagination"]

"""Scoped rate throttles for login, signup, and unfurl endpoints."""

import re

from django.conf import settings
from rest_framework.throttling import ScopedRateThrottle

_RATE_PATTERN = re.compile(r"^\s*(\d+)\s*/\s*(\d*)\s*([smhd])", re.IGNORECASE)
_PERIOD_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class ConfigurableScopedRateThrottle(ScopedRateThrottle):
    """ScopedRateThrottle accepting multiplied periods such as ``5/15m``.

    Throttling is skipped entirely while ``settings.RATE_LIMIT_ENABLED`` is
    False, which local development and most tests rely on.
    """

    def parse_rate(self, rate):
        if rate is None:
            return None, None
        match = _RATE_PATTERN.match(rate)
        if not match:
            raise ValueError(f"Invalid throttle rate: {rate!r}")
        num_requests = int(match.group(1))
        multiplier = int(match.group(2) or 1)
        return num_requests, multiplier * _PERIOD_SECONDS[match.group(3).lower()]

    def allow_request(self, request, view):
        if not getattr(settings, "RATE_LIMIT_ENABLED", True):
            return True
        return super().allow_request(request, view)


__all__ = ["ConfigurableScopedRateThrottle"]

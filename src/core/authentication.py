"""DRF authentication class surfacing the user resolved by JWTAuthMiddleware."""

from typing import Any, Optional, Tuple

from rest_framework.authentication import BaseAuthentication


class MiddlewareUserAuthentication(BaseAuthentication):
    """Expose the user attached by ``JWTAuthMiddleware`` as ``request.user``.

    No token parsing happens here: the middleware already rejected bad or
    revoked bearer tokens, so anything left on the Django request is either
    a verified user or anonymous.
    """

    def authenticate(self, request) -> Optional[Tuple[Any, None]]:
        django_request = getattr(request, "_request", None)
        user = getattr(django_request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return None
        return user, None

    def authenticate_header(self, request) -> str:
        # A non-empty challenge makes DRF answer NotAuthenticated with 401 instead of 403.
        return 'Bearer realm="api"'


__all__ = ["MiddlewareUserAuthentication"]

"""Authentication endpoints: signup, login, refresh, logout, and the current user."""

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.db.models import F
from django.utils import timezone
from rest_framework import serializers, status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.response import Response

from core.permissions import IsAuthenticated
from core.response import BaseAPIView, api_response
from core.throttling import ConfigurableScopedRateThrottle
from .serializers import LoginSerializer, SignupSerializer, UserSerializer
from .services import TokenService, bearer_token

logger = logging.getLogger(__name__)

User = get_user_model()


def session_payload(user) -> dict[str, Any]:
    """``{user, access, refresh}`` body returned by signup and login."""
    access, refresh = TokenService.generate_tokens(user)
    return {"user": UserSerializer(user).data, "access": access, "refresh": refresh}


class RefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, allow_blank=True)


class SignupView(BaseAPIView):
    permission_classes: list[Any] = []
    throttle_classes = [ConfigurableScopedRateThrottle]
    throttle_scope = "signup"

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Create an ``email`` account with the user role and sign it in."""
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("User %s signed up", user.pk)
        return api_response(session_payload(user), status=status.HTTP_201_CREATED)


class LoginView(BaseAPIView):
    permission_classes: list[Any] = []
    throttle_classes = [ConfigurableScopedRateThrottle]
    throttle_scope = "login"

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        user.last_login_at = timezone.now()
        user.save(update_fields=["last_login_at", "updated_at"])
        logger.info("User %s logged in", user.pk)
        return api_response(session_payload(user))


class RefreshView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Trade a refresh token for a new access/refresh pair."""
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        token = serializer.validated_data.get("refresh")
        if not token:
            raise AuthenticationFailed("Refresh token required")

        _, access, refresh = TokenService.refresh(token)
        return api_response({"access": access, "refresh": refresh})


class LogoutView(BaseAPIView):
    """Revoke the access token this request was made with."""

    permission_classes = [IsAuthenticated]

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        TokenService.revoke(bearer_token(request))
        return Response(status=status.HTTP_204_NO_CONTENT)


class LogoutAllView(BaseAPIView):
    """Sign the current user out everywhere by bumping ``token_version``."""

    permission_classes = [IsAuthenticated]

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        user = request.user
        User.objects.filter(pk=user.pk).update(token_version=F("token_version") + 1)
        TokenService.revoke(bearer_token(request))
        logger.info("User %s revoked all sessions", user.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(BaseAPIView):
    permission_classes = [IsAuthenticated]

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        return api_response(UserSerializer(request.user).data)

    # noinspection PyMethodMayBeStatic
    def delete(self, request):
        """Deactivate the account; the row is kept and the token revoked."""
        TokenService.revoke(bearer_token(request))
        request.user.is_active = False
        request.user.save(update_fields=["is_active", "updated_at"])
        logger.info("User %s deactivated their account", request.user.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


__all__ = ["SignupView", "LoginView", "RefreshView", "LogoutView", "LogoutAllView", "MeView"]

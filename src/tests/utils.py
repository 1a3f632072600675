"""Shared helpers for tests (user creation, bearer auth, fake Redis)."""

from __future__ import annotations

from typing import Dict
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from authentication.services import TokenService

User = get_user_model()

DEFAULT_PASSWORD = "StrongPass1!"


class FakeRedis:
    """Minimal Redis stub supporting the commands used by TokenService."""

    def __init__(self):
        self._store: Dict[str, str] = {}

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Mimic Redis SETEX; TTL is ignored in tests, value stored in-memory."""
        self._store[key] = value

    def get(self, key: str):
        """Return stored value for key or None, matching Redis GET semantics."""
        return self._store.get(key)

    def clear(self) -> None:
        self._store.clear()


def create_user(email: str, password: str = DEFAULT_PASSWORD, role: str = "user", **extra):
    """Create a user with a bcrypt-hashed password for tests."""

    extra.setdefault("username", email.split("@", 1)[0])
    extra.setdefault("display_name", extra["username"].title())
    if role == "admin":
        return User.objects.create_superuser(email, password, **extra)
    return User.objects.create_user(email, password, **extra)


def client_for(user) -> APIClient:
    """Return an APIClient carrying a fresh access token for ``user``."""

    access, _ = TokenService.generate_tokens(user)
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    return client


@override_settings(RATE_LIMIT_ENABLED=False)
class APITestCase(TestCase):
    """TestCase with Redis replaced by FakeRedis and throttling switched off."""

    @classmethod
    def setUpClass(cls):
        """Patch Redis clients to use in-memory fake for all tests."""
        super().setUpClass()
        cls.fake_redis = FakeRedis()
        cls.patchers = [
            mock.patch("core.redis_client.get_redis_client", return_value=cls.fake_redis),
            mock.patch("authentication.services.get_redis_client", return_value=cls.fake_redis),
        ]
        for patcher in cls.patchers:
            patcher.start()

    @classmethod
    def tearDownClass(cls):
        """Stop Redis patches after all tests complete."""
        for patcher in cls.patchers:
            patcher.stop()
        super().tearDownClass()

    def setUp(self):
        """Fresh anonymous APIClient per test."""
        self.fake_redis.clear()
        self.api_client: APIClient = APIClient()

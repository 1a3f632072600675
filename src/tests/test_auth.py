"""Matrix tests for authentication flows (signup, login, refresh, logout, soft delete)."""

from __future__ import annotations

import time
from unittest import mock

import jwt
from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError
from django.test import override_settings
from rest_framework.test import APIClient

from authentication.models import User
from authentication.services import BlocklistUnavailable, TokenService
from tests.utils import APITestCase, create_user


class AuthFlowTests(APITestCase):
    """End-to-end tests covering auth endpoints and soft delete behavior."""

    @classmethod
    def setUpTestData(cls):
        """Create a default active user for test cases."""
        cls.password = "StrongPass1!"
        cls.user = create_user("user@example.com", cls.password, username="user")

    def _login(self) -> dict:
        return self.api_client.post(
            "/api/auth/login/",
            {"email": self.user.email, "password": self.password},
            format="json",
        ).json()["data"]

    def _create_two_device_clients(self):
        """Helper to create two APIClients authenticated as the same user."""
        login_a, login_b = self._login(), self._login()
        client_a = APIClient()
        client_b = APIClient()
        client_a.credentials(HTTP_AUTHORIZATION=f"Bearer {login_a['access']}")
        client_b.credentials(HTTP_AUTHORIZATION=f"Bearer {login_b['access']}")
        return client_a, client_b

    def test_signup_success(self):
        """Successful signup returns the user and a token pair."""
        payload = {
            "fullName": "New Person",
            "username": "NewPerson",
            "email": "New@Example.com",
            "password": "NewPass123!",
            "city": "Pune",
        }
        response = self.api_client.post("/api/auth/signup/", payload, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(body["errors"], [])
        user = body["data"]["user"]
        self.assertEqual(user["email"], "new@example.com")
        self.assertEqual(user["role"], "user")
        self.assertEqual(user["profile"]["username"], "newperson")
        self.assertEqual(user["profile"]["displayName"], "New Person")
        self.assertEqual(user["profile"]["city"], "Pune")
        self.assertNotIn("password", user)
        self.assertNotIn("password_hash", user)
        self.assertIn("access", body["data"])
        self.assertIn("refresh", body["data"])

    def test_signup_weak_password_400(self):
        payload = {"fullName": "Weak", "username": "weakling", "email": "weak@example.com", "password": "password"}
        response = self.api_client.post("/api/auth/signup/", payload, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 400)
        self.assertIsNone(body["data"])
        self.assertTrue(body["errors"])

    def test_signup_duplicate_email_409(self):
        payload = {"fullName": "Dup", "username": "other", "email": "USER@example.com", "password": "NewPass123!"}
        response = self.api_client.post("/api/auth/signup/", payload, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 409)
        self.assertEqual(body["code"], "EMAIL_ALREADY_EXISTS")
        self.assertIsNone(body["data"])

    def test_signup_duplicate_username_409(self):
        payload = {"fullName": "Dup", "username": "USER", "email": "fresh@example.com", "password": "NewPass123!"}
        response = self.api_client.post("/api/auth/signup/", payload, format="json")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "USERNAME_ALREADY_EXISTS")

    @mock.patch("authentication.serializers.ensure_username_available")
    @mock.patch("authentication.serializers.ensure_email_available")
    def test_signup_losing_a_race_is_409(self, _email_check, _username_check):
        """A unique-constraint clash after the availability checks is still a conflict."""
        payload = {"fullName": "Racer", "username": "racer", "email": "user@example.com", "password": "NewPass123!"}
        response = self.api_client.post("/api/auth/signup/", payload, format="json")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "ACCOUNT_ALREADY_EXISTS")
        self.assertFalse(User.objects.filter(username="racer").exists())

    def test_login_success_returns_tokens_and_stamps_login(self):
        """Valid credentials return access and refresh tokens."""
        response = self.api_client.post(
            "/api/auth/login/",
            {"email": "USER@example.com", "password": self.password},
            format="json",
        )
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertIn("access", body["data"])
        self.assertIn("refresh", body["data"])
        self.assertEqual(body["data"]["user"]["id"], str(self.user.id))
        self.assertEqual(body["errors"], [])
        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login_at)

    def test_login_invalid_credentials_401(self):
        """Bad password returns 401 with null data."""
        response = self.api_client.post(
            "/api/auth/login/",
            {"email": self.user.email, "password": "wrongpass"},
            format="json",
        )
        body = response.json()

        self.assertEqual(response.status_code, 401)
        self.assertIsNone(body["data"])
        self.assertTrue(body["errors"])

    def test_login_inactive_user_401(self):
        """Inactive user cannot log in and receives 401."""
        self.user.is_active = False
        self.user.save(update_fields=["is_active"])

        response = self.api_client.post(
            "/api/auth/login/",
            {"email": self.user.email, "password": self.password},
            format="json",
        )

        self.assertEqual(response.status_code, 401)
        self.assertIsNone(response.json()["data"])

    @override_settings(RATE_LIMIT_ENABLED=True)
    def test_login_is_throttled(self):
        cache.clear()
        statuses = [
            self.api_client.post(
                "/api/auth/login/", {"email": self.user.email, "password": "wrong"}, format="json"
            ).status_code
            for _ in range(6)
        ]
        cache.clear()

        self.assertEqual(statuses[:5], [401] * 5)
        self.assertEqual(statuses[5], 429)

    def test_refresh_with_valid_refresh_token(self):
        """Refresh endpoint issues new access/refresh tokens."""
        login = self._login()

        response = self.api_client.post("/api/auth/refresh/", {"refresh": login["refresh"]}, format="json")
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertIn("access", body["data"])
        self.assertIn("refresh", body["data"])
        self.assertNotEqual(body["data"]["refresh"], login["refresh"])

    def test_refresh_with_access_token_rejected(self):
        """Providing an access token to refresh endpoint returns 401."""
        tokens = self._login()

        response = self.api_client.post("/api/auth/refresh/", {"refresh": tokens["access"]}, format="json")

        self.assertEqual(response.status_code, 401)
        self.assertIsNone(response.json()["data"])

    def test_logout_blocklists_token(self):
        """Logout blocklists current access token causing subsequent 401."""
        tokens = self._login()
        self.api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        logout_response = self.api_client.post("/api/auth/logout/")
        self.assertEqual(logout_response.status_code, 204)

        # Reusing the same token should now fail because it was blocklisted.
        me_response = self.api_client.get("/api/auth/me/")
        self.assertEqual(me_response.status_code, 401)

    def test_me_returns_current_user(self):
        tokens = self._login()
        self.api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.api_client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["email"], self.user.email)

    def test_me_without_token_401(self):
        self.assertEqual(self.api_client.get("/api/auth/me/").status_code, 401)

    def test_malformed_bearer_token_401(self):
        self.api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")
        response = self.api_client.get("/api/articles/")
        self.assertEqual(response.status_code, 401)

    def test_soft_delete_blocks_token_and_future_login(self):
        """Soft delete blocklists active token and prevents future logins."""
        tokens = self._login()
        self.api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        delete_response = self.api_client.delete("/api/auth/me/")
        self.assertEqual(delete_response.status_code, 204)

        # Existing token is blocklisted.
        me_response = self.api_client.get("/api/auth/me/")
        self.assertEqual(me_response.status_code, 401)

        # User is inactive and cannot log in again.
        self.api_client.credentials()
        relogin = self.api_client.post(
            "/api/auth/login/",
            {"email": self.user.email, "password": self.password},
            format="json",
        )
        self.assertEqual(relogin.status_code, 401)

    def test_logout_all_revokes_access_and_refresh_tokens_across_devices(self):
        """logout-all invalidates all existing tokens (access and refresh)."""
        login_a, login_b = self._login(), self._login()

        client_a = APIClient()
        client_a.credentials(HTTP_AUTHORIZATION=f"Bearer {login_a['access']}")
        logout_all_response = client_a.post("/api/auth/logout-all/")
        self.assertEqual(logout_all_response.status_code, 204)

        # Device B's access token should now be invalid due to token_version bump.
        client_b = APIClient()
        client_b.credentials(HTTP_AUTHORIZATION=f"Bearer {login_b['access']}")
        self.assertEqual(client_b.get("/api/auth/me/").status_code, 401)

        for refresh in (login_a["refresh"], login_b["refresh"]):
            response = self.api_client.post("/api/auth/refresh/", {"refresh": refresh}, format="json")
            self.assertEqual(response.status_code, 401)

        # A fresh login carries the new version and works.
        fresh = self._login()
        self.api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {fresh['access']}")
        self.assertEqual(self.api_client.get("/api/auth/me/").status_code, 200)

    def test_refresh_after_soft_delete_returns_401(self):
        """Refresh tokens issued before soft delete must not work afterwards."""
        login = self._login()

        self.api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login['access']}")
        self.assertEqual(self.api_client.delete("/api/auth/me/").status_code, 204)

        self.api_client.credentials()
        refresh_response = self.api_client.post("/api/auth/refresh/", {"refresh": login["refresh"]}, format="json")

        self.assertEqual(refresh_response.status_code, 401)
        self.assertIsNone(refresh_response.json()["data"])

    def test_logout_redis_down_returns_503(self):
        """If Redis is unavailable during logout, the API should fail-closed."""
        login = self._login()
        self.api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login['access']}")

        with mock.patch.object(
                TokenService,
                "block_token",
                side_effect=BlocklistUnavailable("Redis unavailable while blocklisting"),
        ):
            response = self.api_client.post("/api/auth/logout/")

        body = response.json()
        self.assertEqual(response.status_code, 503)
        self.assertIsNone(body["data"])
        self.assertTrue(body["errors"])

    def test_blocklist_check_redis_down_returns_503(self):
        login = self._login()
        self.api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login['access']}")

        with mock.patch.object(TokenService, "is_token_blocked", side_effect=BlocklistUnavailable("down")):
            response = self.api_client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 503)

    def test_expired_refresh_token_returns_401(self):
        """Expired refresh tokens should be rejected with 401 Unauthorized."""
        now = int(time.time())
        payload = {
            "sub": str(self.user.id),
            "jti": "expired-jti",
            "exp": now - 60,  # expired 1 minute ago
            "iat": now - 120,
            "role": self.user.role,
            "type": "refresh",
            "ver": self.user.token_version,
        }
        expired_refresh = jwt.encode(payload, settings.SECRET_KEY, algorithm=TokenService.ALGORITHM)

        response = self.api_client.post("/api/auth/refresh/", {"refresh": expired_refresh}, format="json")

        self.assertEqual(response.status_code, 401)
        self.assertIsNone(response.json()["data"])

    def test_concurrent_logout_from_multiple_devices(self):
        """Multiple access tokens for the same user can be logged out independently."""
        client_a, client_b = self._create_two_device_clients()

        self.assertEqual(client_a.post("/api/auth/logout/").status_code, 204)
        self.assertEqual(client_b.post("/api/auth/logout/").status_code, 204)

        self.assertEqual(client_a.get("/api/auth/me/").status_code, 401)
        self.assertEqual(client_b.get("/api/auth/me/").status_code, 401)

        new_login = self.api_client.post(
            "/api/auth/login/",
            {"email": self.user.email, "password": self.password},
            format="json",
        )
        self.assertEqual(new_login.status_code, 200)

    def test_concurrent_soft_delete_is_idempotent_and_safe(self):
        """Repeated DELETE /api/auth/me/ calls do not corrupt state."""
        client_a, client_b = self._create_two_device_clients()

        self.assertEqual(client_a.delete("/api/auth/me/").status_code, 204)
        # Middleware rejects the second device because the user is now inactive.
        self.assertEqual(client_b.delete("/api/auth/me/").status_code, 401)

        self.user.refresh_from_db()
        self.assertFalse(self.user.is_active)

    def test_refresh_when_database_unavailable_returns_503_with_envelope(self):
        """Database errors during refresh should surface as 503 with JSON envelope."""
        refresh_token = self._login()["refresh"]

        with mock.patch(
                "authentication.services.TokenService.user_for",
                side_effect=DatabaseError("DB down"),
        ):
            response = self.api_client.post("/api/auth/refresh/", {"refresh": refresh_token}, format="json")

        body = response.json()
        self.assertEqual(response.status_code, 503)
        self.assertIsNone(body["data"])
        self.assertTrue(body["errors"])


class UserManagerTests(APITestCase):
    def test_passwords_are_bcrypt_hashed(self):
        user = create_user("hash@example.com", "Secret123!")
        self.assertTrue(user.password_hash.startswith("$2"))
        self.assertTrue(user.check_password("Secret123!"))
        self.assertFalse(user.check_password("wrong"))

    def test_account_without_password_hash_never_verifies(self):
        user = create_user("social@example.com")
        User.objects.filter(pk=user.pk).update(password_hash="")
        user.refresh_from_db()
        self.assertFalse(user.check_password(""))

    def test_create_superuser_is_admin(self):
        admin = create_user("root@example.com", role="admin")
        self.assertEqual(admin.role, "admin")
        self.assertTrue(admin.is_staff)

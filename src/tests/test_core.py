"""Middleware, health probe, API 404 envelope and system checks."""

from unittest import mock

from django.core import checks
from django.db import DatabaseError
from django.test import override_settings

from core import redis_client
from tests.utils import APITestCase


class MiddlewareTests(APITestCase):
    def test_request_id_is_echoed(self):
        response = self.api_client.get("/api/health/", HTTP_X_REQUEST_ID="abc-123")
        self.assertEqual(response["X-Request-ID"], "abc-123")

    def test_request_id_is_generated(self):
        response = self.api_client.get("/api/health/")
        self.assertTrue(response["X-Request-ID"])

    @override_settings(MAX_REQUEST_BODY_BYTES=10)
    def test_oversized_body_is_rejected(self):
        response = self.api_client.post("/api/feedback/", {"content": "x" * 100}, format="json")
        self.assertEqual(response.status_code, 413)
        self.assertEqual(response.json(), {"data": None, "errors": ["Request body too large."]})


class HealthTests(APITestCase):
    def test_healthy(self):
        response = self.api_client.get("/api/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], {"status": "ok", "database": "connected"})

    def test_database_down(self):
        with mock.patch("core.views.connection.cursor", side_effect=DatabaseError("gone")):
            response = self.api_client.get("/api/health/")
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["data"]["database"], "disconnected")


class NotFoundTests(APITestCase):
    def test_unknown_api_path_uses_envelope(self):
        response = self.api_client.get("/api/nope/")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"data": None, "errors": ["API endpoint not found: GET /api/nope/"]})


class RedisClientTests(APITestCase):
    def test_reset_drops_cached_client(self):
        sentinel = object()
        with mock.patch.object(redis_client, "_client", sentinel):
            redis_client.reset_redis_client()
            self.assertIsNone(redis_client._client)


class SystemCheckTests(APITestCase):
    def test_owner_views_declare_owner_field(self):
        errors = [error for error in checks.run_checks() if error.id == "core.E001"]
        self.assertEqual(errors, [])

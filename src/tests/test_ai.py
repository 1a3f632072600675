"""Summarize and takeaways endpoints backed by Gemini."""

import json
from unittest import mock

import requests
from django.test import override_settings

from ai.services import SUMMARY_INPUT_LIMIT
from tests.utils import APITestCase, client_for, create_user


def gemini_reply(text: str):
    response = mock.Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    return response


@override_settings(GEMINI_API_KEY="test-key")
class AIEndpointTests(APITestCase):
    def setUp(self):
        super().setUp()
        self.client_ = client_for(create_user("writer@example.com"))

    @mock.patch("ai.client.requests.post")
    def test_summarize(self, post):
        post.return_value = gemini_reply(
            json.dumps({"title": "Compounding", "excerpt": "Small gains add up.", "tags": ["a", "b", "c", "d"]})
        )

        response = self.client_.post("/api/ai/summarize/", {"text": "Long article"}, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json()["data"],
            {"title": "Compounding", "excerpt": "Small gains add up.", "tags": ["a", "b", "c"]},
        )
        _, kwargs = post.call_args
        self.assertEqual(kwargs["headers"]["x-goog-api-key"], "test-key")
        self.assertEqual(kwargs["json"]["generationConfig"]["responseMimeType"], "application/json")

    @mock.patch("ai.client.requests.post")
    def test_input_is_truncated(self, post):
        post.return_value = gemini_reply(json.dumps({"title": "t", "excerpt": "e", "tags": []}))
        self.client_.post("/api/ai/summarize/", {"text": "x" * (SUMMARY_INPUT_LIMIT + 500)}, format="json")

        prompt = post.call_args.kwargs["json"]["contents"][0]["parts"][0]["text"]
        self.assertIn("x" * SUMMARY_INPUT_LIMIT, prompt)
        self.assertNotIn("x" * (SUMMARY_INPUT_LIMIT + 1), prompt)

    @mock.patch("ai.client.requests.post")
    def test_takeaways(self, post):
        post.return_value = gemini_reply("- one\n- two\n- three")
        response = self.client_.post("/api/ai/takeaways/", {"text": "Some text"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], {"takeaways": "- one\n- two\n- three"})

    def test_text_is_required(self):
        for payload in ({}, {"text": ""}):
            response = self.client_.post("/api/ai/summarize/", payload, format="json")
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json()["errors"], [{"text": ["Text is required"]}])

    def test_requires_authentication(self):
        response = self.api_client.post("/api/ai/summarize/", {"text": "hi"}, format="json")
        self.assertEqual(response.status_code, 401)

    @override_settings(GEMINI_API_KEY=None)
    def test_unconfigured_key_is_503(self):
        response = self.client_.post("/api/ai/takeaways/", {"text": "hi"}, format="json")
        self.assertEqual(response.status_code, 503)

    @mock.patch("ai.client.requests.post", side_effect=requests.ConnectionError("down"))
    def test_upstream_failure_is_502(self, _post):
        response = self.client_.post("/api/ai/takeaways/", {"text": "hi"}, format="json")
        self.assertEqual(response.status_code, 502)

    @mock.patch("ai.client.requests.post")
    def test_non_json_summary_is_502(self, post):
        post.return_value = gemini_reply("not json")
        response = self.client_.post("/api/ai/summarize/", {"text": "hi"}, format="json")
        self.assertEqual(response.status_code, 502)

"""Page/limit pagination envelope."""

from django.test import SimpleTestCase
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from articles.models import Article
from core.pagination import PageLimitPagination
from tests.utils import APITestCase, create_user

factory = APIRequestFactory()


def paginate(items, **params):
    paginator = PageLimitPagination(default_limit=3, max_limit=5)
    request = Request(factory.get("/", params))
    page = paginator.paginate_queryset(items, request)
    return paginator.build_payload(page)


class PaginationTests(SimpleTestCase):
    items = list(range(12))

    def test_defaults(self):
        payload = paginate(self.items)
        self.assertEqual(payload["data"], [0, 1, 2])
        self.assertEqual((payload["total"], payload["page"], payload["limit"]), (12, 1, 3))
        self.assertTrue(payload["hasMore"])
        self.assertEqual(payload["errors"], [])

    def test_last_page_has_no_more(self):
        payload = paginate(self.items, page=3, limit=5)
        self.assertEqual(payload["data"], [10, 11])
        self.assertFalse(payload["hasMore"])

    def test_limits_are_clamped(self):
        self.assertEqual(paginate(self.items, limit=500)["limit"], 5)
        self.assertEqual(paginate(self.items, limit=0)["limit"], 1)
        self.assertEqual(paginate(self.items, page=-4)["page"], 1)

    def test_garbage_values_use_defaults(self):
        payload = paginate(self.items, page="x", limit="y")
        self.assertEqual((payload["page"], payload["limit"]), (1, 3))

    def test_page_past_the_end_is_empty(self):
        payload = paginate(self.items, page=10)
        self.assertEqual(payload["data"], [])
        self.assertFalse(payload["hasMore"])


class OversizedPageTests(APITestCase):
    def test_huge_page_number_returns_empty_page(self):
        Article.objects.create(author=create_user("writer@example.com"), content="x", tags=["general"])
        response = self.api_client.get("/api/articles/", {"page": "99999999999999999999"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["data"], [])
        self.assertEqual(body["total"], 1)
        self.assertFalse(body["hasMore"])

"""Article CRUD, visibility, filtering and batch publish."""

from __future__ import annotations

from articles.models import Article
from nugget_collections.models import Collection, CollectionEntry
from tags.models import Tag
from tests.utils import APITestCase, client_for, create_user


def make_article(author, **fields) -> Article:
    fields.setdefault("title", "A nugget")
    fields.setdefault("content", "Some content")
    fields.setdefault("tags", ["general"])
    return Article.objects.create(author=author, **fields)


class ArticleVisibilityTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.author = create_user("author@example.com")
        cls.other = create_user("other@example.com")
        cls.admin = create_user("admin@example.com", role="admin")
        cls.public = make_article(cls.author, title="Public nugget")
        cls.private = make_article(cls.author, title="Private nugget", visibility=Article.Visibility.PRIVATE)

    def _titles(self, client) -> set[str]:
        body = client.get("/api/articles/").json()
        return {item["title"] for item in body["data"]}

    def test_anonymous_sees_public_only(self):
        self.assertEqual(self._titles(self.api_client), {"Public nugget"})

    def test_other_user_sees_public_only(self):
        self.assertEqual(self._titles(client_for(self.other)), {"Public nugget"})

    def test_author_sees_own_private(self):
        self.assertEqual(self._titles(client_for(self.author)), {"Public nugget", "Private nugget"})

    def test_admin_sees_everything(self):
        self.assertEqual(self._titles(client_for(self.admin)), {"Public nugget", "Private nugget"})

    def test_private_detail_is_404_for_others(self):
        url = f"/api/articles/{self.private.pk}/"
        self.assertEqual(self.api_client.get(url).status_code, 404)
        self.assertEqual(client_for(self.other).get(url).status_code, 404)
        self.assertEqual(client_for(self.author).get(url).status_code, 200)

    def test_list_is_paginated(self):
        body = self.api_client.get("/api/articles/", {"limit": 1}).json()
        self.assertEqual(body["total"], 1)
        self.assertEqual(body["page"], 1)
        self.assertEqual(body["limit"], 1)
        self.assertFalse(body["hasMore"])
        self.assertEqual(body["errors"], [])


class ArticleWriteTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.author = create_user("author@example.com")
        cls.other = create_user("other@example.com")
        cls.admin = create_user("admin@example.com", role="admin")

    def setUp(self):
        super().setUp()
        self.client_author = client_for(self.author)

    def test_create_and_fetch_round_trip(self):
        payload = {
            "title": "Hello",
            "excerpt": "Short",
            "content": "Body text",
            "categories": ["Tech", "tech ", "Business"],
            "tags": ["AI", "Startups"],
            "visibility": "public",
            "readTime": 3,
            "source_type": "link",
        }
        created = self.client_author.post("/api/articles/", payload, format="json")
        self.assertEqual(created.status_code, 201)
        data = created.json()["data"]

        self.assertEqual(data["authorId"], str(self.author.pk))
        self.assertEqual(data["author"], {"id": str(self.author.pk), "name": self.author.display_name})
        self.assertEqual(sorted(data["categories"]), ["Business", "Tech"])
        self.assertEqual(data["tags"], ["AI", "Startups"])
        self.assertEqual(data["sourceType"], "link")
        self.assertIsNotNone(data["publishedAt"])
        self.assertTrue(Tag.objects.filter(canonical_name="tech", type=Tag.Type.CATEGORY).exists())

        fetched = self.api_client.get(f"/api/articles/{data['id']}/").json()["data"]
        self.assertEqual(fetched, data)

    def test_create_requires_authentication(self):
        response = self.api_client.post("/api/articles/", {"content": "x", "tags": ["a"]}, format="json")
        self.assertEqual(response.status_code, 401)

    def test_create_requires_tags(self):
        response = self.client_author.post("/api/articles/", {"content": "Body"}, format="json")
        self.assertEqual(response.status_code, 400)

        response = self.client_author.post("/api/articles/", {"content": "Body", "tags": ["  "]}, format="json")
        self.assertEqual(response.status_code, 400)

    def test_create_requires_some_content(self):
        response = self.client_author.post("/api/articles/", {"title": "Empty", "tags": ["a"]}, format="json")
        self.assertEqual(response.status_code, 400)

        response = self.client_author.post(
            "/api/articles/", {"tags": ["a"], "images": ["https://example.com/a.png"]}, format="json"
        )
        self.assertEqual(response.status_code, 201)

    def test_unknown_fields_rejected(self):
        response = self.client_author.post(
            "/api/articles/", {"content": "Body", "tags": ["a"], "hacker": True}, format="json"
        )
        self.assertEqual(response.status_code, 400)

    def test_server_owned_fields_are_ignored(self):
        response = self.client_author.post(
            "/api/articles/",
            {"content": "Body", "tags": ["a"], "authorId": str(self.other.pk), "authorName": "Someone"},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["data"]["authorId"], str(self.author.pk))

    def test_masonry_title_limit(self):
        response = self.client_author.post(
            "/api/articles/",
            {"tags": ["a"], "media": {"type": "image", "url": "https://x.io/a.png", "masonryTitle": "x" * 81}},
            format="json",
        )
        self.assertEqual(response.status_code, 400)

    def test_author_can_update_and_updated_at_moves(self):
        article = make_article(self.author)
        before = article.updated_at

        response = self.client_author.patch(f"/api/articles/{article.pk}/", {"title": "Renamed"}, format="json")

        self.assertEqual(response.status_code, 200)
        article.refresh_from_db()
        self.assertEqual(article.title, "Renamed")
        self.assertGreater(article.updated_at, before)

    def test_update_cannot_strip_all_content(self):
        article = make_article(self.author)
        response = self.client_author.patch(f"/api/articles/{article.pk}/", {"content": ""}, format="json")
        self.assertEqual(response.status_code, 400)

    def test_other_user_cannot_update_or_delete(self):
        article = make_article(self.author)
        client = client_for(self.other)
        self.assertEqual(client.patch(f"/api/articles/{article.pk}/", {"title": "x"}, format="json").status_code, 403)
        self.assertEqual(client.delete(f"/api/articles/{article.pk}/").status_code, 403)

    def test_admin_can_delete_any_and_entries_cascade(self):
        article = make_article(self.author)
        collection = Collection.objects.create(raw_name="Mine", creator=self.author)
        CollectionEntry.objects.create(collection=collection, article=article, added_by=self.author)

        response = client_for(self.admin).delete(f"/api/articles/{article.pk}/")

        self.assertEqual(response.status_code, 204)
        self.assertFalse(Article.objects.filter(pk=article.pk).exists())
        self.assertFalse(CollectionEntry.objects.filter(collection=collection).exists())


class ArticleFilterTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.alice = create_user("alice@example.com")
        cls.bob = create_user("bob@example.com")
        tech = Tag.objects.create(raw_name="Tech", type=Tag.Type.CATEGORY)
        first = make_article(cls.alice, title="Rust 2.0 released", tags=["Programming"])
        first.categories.add(tech)
        make_article(cls.bob, title="Cooking basics", content="100% (literal) butter", tags=["Food"])

    def _titles(self, params) -> list[str]:
        return [item["title"] for item in self.api_client.get("/api/articles/", params).json()["data"]]

    def test_filter_by_author(self):
        self.assertEqual(self._titles({"authorId": str(self.alice.pk)}), ["Rust 2.0 released"])

    def test_invalid_author_id_gives_empty_list(self):
        self.assertEqual(self._titles({"authorId": "not-a-uuid"}), [])

    def test_filter_by_category_case_insensitive(self):
        self.assertEqual(self._titles({"category": "TECH"}), ["Rust 2.0 released"])

    def test_search_is_literal_and_case_insensitive(self):
        self.assertEqual(self._titles({"q": "RUST 2.0"}), ["Rust 2.0 released"])
        self.assertEqual(self._titles({"q": "(literal)"}), ["Cooking basics"])
        self.assertEqual(self._titles({"q": "programming"}), ["Rust 2.0 released"])
        self.assertEqual(self._titles({"q": ".*"}), [])

    def test_search_matches_non_ascii_tags(self):
        make_article(self.bob, title="Morning brew", tags=["Café", "Mornings"])
        self.assertEqual(self._titles({"q": "Café"}), ["Morning brew"])
        self.assertEqual(self._titles({"q": "CAFÉ"}), ["Morning brew"])


class BatchPublishTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.author = create_user("author@example.com")
        cls.other = create_user("other@example.com")
        cls.admin = create_user("admin@example.com", role="admin")

    def test_publishes_only_own_articles(self):
        mine = make_article(self.author, visibility=Article.Visibility.PRIVATE)
        theirs = make_article(self.other, visibility=Article.Visibility.PRIVATE)

        response = client_for(self.author).post(
            "/api/batch/publish/", {"ids": [str(mine.pk), str(theirs.pk), "bogus"]}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], {"updatedCount": 1, "requestedCount": 2})
        mine.refresh_from_db()
        theirs.refresh_from_db()
        self.assertEqual(mine.visibility, Article.Visibility.PUBLIC)
        self.assertEqual(theirs.visibility, Article.Visibility.PRIVATE)

    def test_admin_publishes_any(self):
        theirs = make_article(self.other, visibility=Article.Visibility.PRIVATE)
        response = client_for(self.admin).post("/api/batch/publish/", {"ids": [theirs.pk]}, format="json")
        self.assertEqual(response.json()["data"]["updatedCount"], 1)

    def test_id_count_limits(self):
        client = client_for(self.author)
        self.assertEqual(client.post("/api/batch/publish/", {"ids": []}, format="json").status_code, 400)
        too_many = [str(i) for i in range(1, 102)]
        self.assertEqual(client.post("/api/batch/publish/", {"ids": too_many}, format="json").status_code, 400)

    def test_requires_authentication(self):
        self.assertEqual(self.api_client.post("/api/batch/publish/", {"ids": ["1"]}, format="json").status_code, 401)

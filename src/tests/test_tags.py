"""Category and tag endpoints."""

from articles.models import Article
from tags.models import Tag
from tests.utils import APITestCase, client_for, create_user


class TagListTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = create_user("tagger@example.com")
        cls.admin = create_user("boss@example.com", role="admin")
        cls.tech = Tag.objects.create(raw_name="Tech", type=Tag.Type.CATEGORY, is_official=True)
        cls.old = Tag.objects.create(raw_name="Legacy", status=Tag.Status.DEPRECATED)
        article = Article.objects.create(author=cls.user, content="x", tags=["tech"])
        article.categories.add(cls.tech)

    def test_simple_format_lists_active_names(self):
        response = self.api_client.get("/api/categories/", {"format": "simple"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], ["Tech"])

    def test_full_format_includes_usage_counts(self):
        data = self.api_client.get("/api/categories/", {"format": "full"}).json()["data"]
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]["name"], "Tech")
        self.assertEqual(data[0]["usageCount"], 1)
        self.assertTrue(data[0]["isOfficial"])

    def test_default_format_lists_every_tag(self):
        body = self.api_client.get("/api/categories/").json()
        self.assertEqual([t["name"] for t in body["data"]], ["Legacy", "Tech"])
        self.assertEqual(body["total"], 2)

    def test_create_requires_authentication(self):
        response = self.api_client.post("/api/categories/", {"name": "Science"}, format="json")
        self.assertEqual(response.status_code, 401)

    def test_create_and_return_existing(self):
        client = client_for(self.user)
        created = client.post("/api/categories/", {"name": " Science "}, format="json")
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["data"]["canonicalName"], "science")
        self.assertFalse(created.json()["data"]["isOfficial"])

        again = client.post("/api/categories/", {"name": "SCIENCE"}, format="json")
        self.assertEqual(again.status_code, 200)
        self.assertEqual(again.json()["data"]["id"], created.json()["data"]["id"])

    def test_categories_are_official_by_default(self):
        response = client_for(self.user).post(
            "/api/categories/", {"name": "Finance", "type": "category"}, format="json"
        )
        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.json()["data"]["isOfficial"])

    def test_blank_name_rejected(self):
        response = client_for(self.user).post("/api/categories/", {"name": "   "}, format="json")
        self.assertEqual(response.status_code, 400)


class TagAdminTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = create_user("member@example.com")
        cls.admin = create_user("root@example.com", role="admin")

    def setUp(self):
        super().setUp()
        self.admin_client = client_for(self.admin)
        self.tag = Tag.objects.create(raw_name="AI")
        Tag.objects.create(raw_name="ML")

    def test_non_admin_cannot_update(self):
        response = client_for(self.user).patch(f"/api/categories/{self.tag.pk}/", {"name": "X"}, format="json")
        self.assertEqual(response.status_code, 403)

    def test_rename_rewrites_article_tags(self):
        article = Article.objects.create(author=self.user, content="x", tags=["ai", "Robots"])
        untouched = Article.objects.create(author=self.user, content="y", tags=["Fairy tales"])

        response = self.admin_client.put(
            f"/api/categories/{self.tag.pk}/", {"name": "Artificial Intelligence"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["canonicalName"], "artificial intelligence")
        article.refresh_from_db()
        untouched.refresh_from_db()
        self.assertEqual(article.tags, ["Artificial Intelligence", "Robots"])
        self.assertEqual(untouched.tags, ["Fairy tales"])

    def test_rename_rewrites_non_ascii_tags(self):
        cafe = Tag.objects.create(raw_name="Café")
        article = Article.objects.create(author=self.user, content="x", tags=["Café", "Robots"])

        response = self.admin_client.put(f"/api/categories/{cafe.pk}/", {"name": "Coffee"}, format="json")

        self.assertEqual(response.status_code, 200)
        article.refresh_from_db()
        self.assertEqual(article.tags, ["Coffee", "Robots"])

    def test_rename_to_existing_name_conflicts(self):
        response = self.admin_client.patch(f"/api/categories/{self.tag.pk}/", {"name": "ml"}, format="json")
        self.assertEqual(response.status_code, 409)

    def test_partial_update_of_status(self):
        response = self.admin_client.patch(
            f"/api/categories/{self.tag.pk}/", {"status": "deprecated"}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["status"], "deprecated")
        self.assertEqual(response.json()["data"]["name"], "AI")

    def test_update_unknown_tag(self):
        self.assertEqual(self.admin_client.patch("/api/categories/9999/", {}, format="json").status_code, 404)
        self.assertEqual(self.admin_client.patch("/api/categories/abc/", {}, format="json").status_code, 404)

    def test_delete_by_id_or_name(self):
        self.assertEqual(self.admin_client.delete(f"/api/categories/{self.tag.pk}/").status_code, 204)
        self.assertEqual(self.admin_client.delete("/api/categories/ml/").status_code, 204)
        self.assertFalse(Tag.objects.exists())
        self.assertEqual(self.admin_client.delete("/api/categories/ml/").status_code, 404)

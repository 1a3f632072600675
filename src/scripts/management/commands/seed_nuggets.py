"""Seed demo accounts, official categories, sample nuggets and a collection."""

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils.dateparse import parse_datetime

from articles.models import Article
from authentication.models import User, default_preferences
from nugget_collections.models import Collection, CollectionEntry
from tags.models import Tag
from tags.services import resolve_categories

ADMIN_EMAIL = "admin@example.com"
DEMO_EMAIL = "demo@example.com"

CATEGORIES = [
    "Tech",
    "Business",
    "Finance",
    "Design",
    "Lifestyle",
    "India",
    "Innovation",
    "Sustainability",
    "Startups",
    "Economy",
    "Growth",
    "Development",
]

# (author key, title, excerpt, categories, tags, published at)
SAMPLE_ARTICLES = [
    (
        "admin",
        "India's Economic Growth Hits 8%",
        "India's economy reaches 8% GDP growth, driven by strong manufacturing and digital initiatives.",
        ["Business", "Economy"],
        ["India", "Economy", "Growth"],
        "2025-10-01T08:00:00Z",
    ),
    (
        "admin",
        "Tech Innovation in Bangalore",
        "Bangalore leads tech innovation with 500+ new startups, driven by world-class talent and VC presence.",
        ["Tech", "Innovation"],
        ["Tech", "Innovation", "Bangalore"],
        "2025-10-02T09:30:00Z",
    ),
    (
        "demo",
        "Sustainable Development Goals Progress",
        "India makes significant progress on SDGs with 40% year-over-year growth in solar capacity.",
        ["Lifestyle", "Sustainability"],
        ["Sustainability", "Development"],
        "2025-10-03T10:15:00Z",
    ),
    (
        "demo",
        "Startup Ecosystem Expansion",
        "India's startup ecosystem expands with unicorns emerging across fintech, edtech, and healthtech.",
        ["Business", "Startups"],
        ["Startups", "Business", "India"],
        "2025-10-04T11:00:00Z",
    ),
    (
        "admin",
        "Digital Payment Revolution",
        "UPI transactions cross 10 billion monthly, making India a global leader in digital payments.",
        ["Finance", "Innovation"],
        ["Finance", "Innovation", "India"],
        "2025-10-05T12:00:00Z",
    ),
    (
        "demo",
        "Green Energy Transition",
        "Ambitious renewable targets and large-scale wind and solar projects reshape India's energy mix.",
        ["Lifestyle", "Sustainability"],
        ["Sustainability", "Development", "Economy"],
        "2025-10-09T16:00:00Z",
    ),
]


class Command(BaseCommand):
    help = (
        "Seed an admin and a demo user, official categories, sample nuggets and a "
        "public collection. Use --reset to clear previously seeded data first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete the seeded users (and their nuggets and collections) before seeding.",
        )

    def handle(self, *args, **options):
        with transaction.atomic():
            if options.get("reset"):
                self._reset_seeded_data()

            self.stdout.write("Seeding Nuggets data...")
            self._create_categories()
            users = self._create_users()
            articles = self._create_articles(users)
            self._create_collection(users, articles)
        self.stdout.write(self.style.SUCCESS("Nuggets seed completed."))

    def _reset_seeded_data(self) -> None:
        """Remove the demo accounts; their nuggets and collections cascade with them."""
        self.stdout.write("Resetting previously seeded data...")
        User.objects.filter(email__in=[ADMIN_EMAIL, DEMO_EMAIL]).delete()
        self.stdout.write(self.style.WARNING("Seeded data cleared."))

    @staticmethod
    def _create_categories() -> None:
        resolve_categories(CATEGORIES)
        Tag.objects.filter(canonical_name__in=[name.lower() for name in CATEGORIES]).update(
            type=Tag.Type.CATEGORY, status=Tag.Status.ACTIVE, is_official=True
        )

    @staticmethod
    def _create_users() -> dict[str, User]:
        users = {}
        for key, email, name, username, role, password, interests in (
            ("admin", ADMIN_EMAIL, "Admin User", "admin", User.Role.ADMIN, "Admin@1234", ["Tech", "Business"]),
            ("demo", DEMO_EMAIL, "Demo User", "demo", User.Role.USER, "Demo@1234", ["Design", "Lifestyle"]),
        ):
            user = User.objects.filter(email=email).first()
            if user is None:
                preferences = default_preferences()
                preferences["interestedCategories"] = interests
                create = User.objects.create_superuser if role == User.Role.ADMIN else User.objects.create_user
                user = create(
                    email,
                    password,
                    username=username,
                    display_name=name,
                    email_verified=True,
                    onboarding_completed=True,
                    preferences=preferences,
                )
            users[key] = user
        return users

    @staticmethod
    def _create_articles(users: dict[str, User]) -> list[Article]:
        articles = []
        for author_key, title, excerpt, categories, tags, published_at in SAMPLE_ARTICLES:
            article, created = Article.objects.get_or_create(
                title=title,
                author=users[author_key],
                defaults={
                    "excerpt": excerpt,
                    "content": excerpt,
                    "tags": tags,
                    "read_time": 3,
                    "visibility": Article.Visibility.PUBLIC,
                    "published_at": parse_datetime(published_at),
                },
            )
            if created:
                article.categories.set(resolve_categories(categories))
            articles.append(article)
        return articles

    @staticmethod
    def _create_collection(users: dict[str, User], articles: list[Article]) -> None:
        collection, _ = Collection.objects.get_or_create(
            creator=users["admin"],
            canonical_name="the india growth story",
            defaults={
                "raw_name": "The India Growth Story",
                "description": "A curated list of nuggets tracking India's economic rise.",
                "type": Collection.Type.PUBLIC,
            },
        )
        for article, added_by in ((articles[0], users["admin"]), (articles[3], users["demo"])):
            CollectionEntry.objects.get_or_create(
                collection=collection, article=article, defaults={"added_by": added_by}
            )

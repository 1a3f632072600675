"""Link preview metadata for pasted URLs.

Every URL first gets an offline preview built from its shape alone
(content type, platform name and colour, YouTube thumbnail). Network
enrichment is layered on top where it applies: oEmbed for YouTube and
Twitter/X, Open Graph tags for articles. Any failure along the way keeps
the offline preview, so callers always get a usable result.

Titles are only taken from YouTube oEmbed; for everything else the user
writes the title.
"""

import logging
from typing import Any, Optional
from urllib.parse import parse_qs, urljoin, urlsplit

import requests
from bs4 import BeautifulSoup
from django.conf import settings

from core.lru_cache import LRUCache
from .ssrf import is_url_safe_for_fetch

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 24 * 60 * 60
OEMBED_TIMEOUT_SECONDS = 2
OPEN_GRAPH_TIMEOUT_SECONDS = 3
MAX_HTML_BYTES = 1024 * 1024
MAX_REDIRECTS = 3
USER_AGENT = "NuggetsBot/1.0 (+link preview)"

PLATFORM_COLORS = {
    "youtube.com": "#FF0000",
    "youtu.be": "#FF0000",
    "twitter.com": "#1DA1F2",
    "x.com": "#000000",
}
PLATFORM_NAMES = {
    "youtube.com": "YouTube",
    "youtu.be": "YouTube",
    "twitter.com": "Twitter",
    "x.com": "X",
    "substack.com": "Substack",
    "medium.com": "Medium",
}
YOUTUBE_DOMAINS = ("youtube.com", "youtu.be")
TWITTER_DOMAINS = ("twitter.com", "x.com")
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg")
IMAGE_HOST_MARKERS = ("images.ctfassets.net", "thumbs.", "cdn.", "img.", "image.")
DOCUMENT_EXTENSIONS = (".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".txt", ".zip")

# Estimated card image size used until real dimensions are known.
DEFAULT_IMAGE_WIDTH = 1200
DEFAULT_IMAGE_HEIGHT = 630
DEFAULT_ASPECT_RATIO = 1.91

metadata_cache = LRUCache(max_size=settings.UNFURL_CACHE_SIZE, ttl_seconds=CACHE_TTL_SECONDS)


class UnsafeRedirect(requests.RequestException):
    """A redirect pointed somewhere the SSRF guard refuses to fetch."""


def _matches(domain: str, candidates: tuple[str, ...]) -> bool:
    return any(domain == candidate or domain.endswith(f".{candidate}") for candidate in candidates)


def get_domain(url: str) -> str:
    hostname = (urlsplit(url).hostname or "").lower()
    return hostname[4:] if hostname.startswith("www.") else hostname or "unknown"


def is_image_url(url: str) -> bool:
    """URLs ending in an image extension, or image-looking paths on image CDNs."""
    parts = urlsplit(url)
    path = parts.path.lower()
    host = (parts.hostname or "").lower()
    if path.endswith(IMAGE_EXTENSIONS):
        return True
    if any(marker in host for marker in IMAGE_HOST_MARKERS):
        if any(hint in parts.query for hint in ("fm=", "q=", "format=")):
            return True
        return not path.endswith((".html", ".php", "/"))
    return False


def classify_url(url: str) -> str:
    """Return one of ``video``, ``social``, ``image``, ``document`` or ``article``."""
    domain = get_domain(url)
    if _matches(domain, YOUTUBE_DOMAINS):
        return "video"
    if _matches(domain, TWITTER_DOMAINS):
        return "social"
    if is_image_url(url):
        return "image"
    if urlsplit(url).path.lower().endswith(DOCUMENT_EXTENSIONS):
        return "document"
    return "article"


def extract_youtube_video_id(url: str) -> Optional[str]:
    parts = urlsplit(url)
    domain = get_domain(url)
    if _matches(domain, ("youtu.be",)):
        return parts.path.lstrip("/").split("/")[0] or None
    if _matches(domain, ("youtube.com",)):
        if parts.path.startswith("/watch"):
            return (parse_qs(parts.query).get("v") or [None])[0]
        if parts.path.startswith("/embed/"):
            return parts.path[len("/embed/"):].split("/")[0] or None
    return None


def _image_media(src: str, width: int, height: int, estimated: bool) -> dict[str, Any]:
    return {
        "type": "image",
        "src": src,
        "width": width,
        "height": height,
        "aspectRatio": width / height if height else DEFAULT_ASPECT_RATIO,
        "isEstimated": estimated,
    }


def build_fallback(url: str) -> dict[str, Any]:
    """Preview derived from the URL alone, with no network access."""
    domain = get_domain(url)
    content_type = classify_url(url)
    preview: dict[str, Any] = {
        "url": url,
        "domain": domain,
        "contentType": content_type,
        "title": None,
        "source": {
            "name": PLATFORM_NAMES.get(domain, domain),
            "domain": domain,
            "platformColor": PLATFORM_COLORS.get(domain),
        },
        "description": None,
        "author": None,
        "publishedAt": None,
        "media": None,
        "quality": "fallback",
    }

    if content_type == "video":
        video_id = extract_youtube_video_id(url)
        if video_id:
            preview["media"] = _image_media(
                f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg", 1280, 720, estimated=False
            )
            preview["description"] = "Watch on YouTube →"
    elif content_type == "image":
        preview["media"] = _image_media(url, DEFAULT_IMAGE_WIDTH, DEFAULT_IMAGE_HEIGHT, estimated=True)
    return preview


def _get_json(endpoint: str, params: dict[str, str]) -> Optional[dict[str, Any]]:
    response = requests.get(
        endpoint,
        params=params,
        headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        timeout=OEMBED_TIMEOUT_SECONDS,
    )
    if not response.ok:
        return None
    data = response.json()
    return data if isinstance(data, dict) else None


def fetch_youtube_oembed(url: str) -> Optional[dict[str, Any]]:
    data = _get_json("https://www.youtube.com/oembed", {"url": url, "format": "json"})
    if not data:
        return None
    enrichment: dict[str, Any] = {"quality": "partial"}
    if data.get("title"):
        enrichment["title"] = data["title"]
    if data.get("author_name"):
        enrichment["author"] = data["author_name"]
    if data.get("thumbnail_url"):
        enrichment["media"] = _image_media(data["thumbnail_url"], 1280, 720, estimated=False)
    return enrichment


def fetch_twitter_oembed(url: str) -> Optional[dict[str, Any]]:
    data = _get_json("https://publish.twitter.com/oembed", {"url": url})
    if not data or not data.get("author_name"):
        return None
    return {"author": data["author_name"]}


def _fetch_html(url: str) -> Optional[str]:
    """GET ``url`` following at most MAX_REDIRECTS redirects, each checked by the SSRF guard."""
    current = url
    for _ in range(MAX_REDIRECTS + 1):
        with requests.get(
            current,
            headers={"User-Agent": USER_AGENT, "Accept": "text/html"},
            timeout=OPEN_GRAPH_TIMEOUT_SECONDS,
            allow_redirects=False,
            stream=True,
        ) as response:
            if response.is_redirect:
                current = urljoin(current, response.headers.get("Location", ""))
                safe, reason = is_url_safe_for_fetch(current)
                if not safe:
                    raise UnsafeRedirect(f"Redirect to {current} refused: {reason}")
                continue
            if not response.ok or "html" not in response.headers.get("Content-Type", ""):
                return None
            body = response.raw.read(MAX_HTML_BYTES, decode_content=True)
            return body.decode(response.encoding or "utf-8", errors="replace")
    return None


def _meta(soup: BeautifulSoup, *names: str) -> Optional[str]:
    for name in names:
        tag = soup.find("meta", attrs={"property": name}) or soup.find("meta", attrs={"name": name})
        if tag and tag.get("content"):
            return tag["content"].strip()
    return None


def scrape_open_graph(url: str) -> Optional[dict[str, Any]]:
    """Description, author, date and image from an article's Open Graph tags."""
    html = _fetch_html(url)
    if not html:
        return None
    soup = BeautifulSoup(html, "html.parser")

    enrichment: dict[str, Any] = {}
    description = _meta(soup, "og:description", "twitter:description", "description")
    if description:
        enrichment["description"] = description
    author = _meta(soup, "author", "article:author")
    if author:
        enrichment["author"] = author
    published_at = _meta(soup, "article:published_time", "og:updated_time")
    if published_at:
        enrichment["publishedAt"] = published_at
    image = _meta(soup, "og:image", "og:image:url", "twitter:image")
    if image:
        enrichment["media"] = _image_media(
            urljoin(url, image), DEFAULT_IMAGE_WIDTH, DEFAULT_IMAGE_HEIGHT, estimated=True
        )
    if not enrichment:
        return None
    enrichment["quality"] = "partial"
    return enrichment


def fetch_url_metadata(url: str, skip_cache: bool = False) -> dict[str, Any]:
    """Return preview metadata for ``url``; never raises for network problems.

    Results, fallbacks included, are cached for a day per URL.
    """
    if not skip_cache:
        cached = metadata_cache.get(url)
        if cached is not None:
            return cached

    preview = build_fallback(url)
    content_type = preview["contentType"]
    enrich = None
    if content_type == "video":
        enrich = fetch_youtube_oembed
    elif content_type == "social":
        enrich = fetch_twitter_oembed
    elif content_type == "article":
        enrich = scrape_open_graph

    if enrich is not None:
        try:
            enrichment = enrich(url)
        except (requests.RequestException, ValueError) as exc:
            logger.info("Metadata fetch for %s failed, using fallback: %s", url, exc)
            enrichment = None
        if enrichment:
            preview.update(enrichment)

    metadata_cache.set(url, preview)
    return preview


__all__ = [
    "metadata_cache",
    "get_domain",
    "is_image_url",
    "classify_url",
    "extract_youtube_video_id",
    "build_fallback",
    "fetch_youtube_oembed",
    "fetch_twitter_oembed",
    "scrape_open_graph",
    "fetch_url_metadata",
]

"""Prompts for turning pasted text into nugget drafts."""

from typing import Any

from .client import GeminiClient

SUMMARY_INPUT_LIMIT = 10_000
TAKEAWAYS_INPUT_LIMIT = 15_000

SUMMARY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "excerpt": {"type": "STRING"},
        "tags": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
}


def summarize_text(text: str, client: GeminiClient | None = None) -> dict[str, Any]:
    """Condense ``text`` into a title (≤60 chars), an excerpt (≤280) and up to 3 tags."""
    client = client or GeminiClient()
    prompt = (
        'You are an expert news editor. Condense the following text into a "Nugget" - '
        "a bite-sized, high-value piece of information.\n\n"
        f'Input: "{text[:SUMMARY_INPUT_LIMIT]}"\n\n'
        "Output JSON with:\n"
        "- title: max 60 chars, catchy\n"
        "- excerpt: max 280 chars, key insight\n"
        "- tags: array of strings (max 3)"
    )
    data = client.generate_json(prompt, SUMMARY_SCHEMA)
    tags = data.get("tags") or []
    return {
        "title": str(data.get("title") or ""),
        "excerpt": str(data.get("excerpt") or ""),
        "tags": [str(tag) for tag in tags if tag][:3] if isinstance(tags, list) else [],
    }


def generate_takeaways(text: str, client: GeminiClient | None = None) -> str:
    """Return 3-5 takeaways from ``text`` as a Markdown list."""
    client = client or GeminiClient()
    prompt = (
        "Analyze the text and provide 3-5 concise takeaways formatted as a Markdown list.\n\n"
        f'Text: "{text[:TAKEAWAYS_INPUT_LIMIT]}"'
    )
    return client.generate(prompt)


__all__ = ["SUMMARY_INPUT_LIMIT", "TAKEAWAYS_INPUT_LIMIT", "summarize_text", "generate_takeaways"]

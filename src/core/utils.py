"""Small parsing helpers for ids arriving in URLs and query strings."""

import uuid
from typing import Optional


def is_uuid(value) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def parse_int_id(value) -> Optional[int]:
    """Return ``value`` as an integer primary key, or None when it is not one."""
    text = str(value).strip()
    return int(text) if text.isdigit() else None


__all__ = ["is_uuid", "parse_int_id"]

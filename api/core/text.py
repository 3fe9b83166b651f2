"""
Text sanitizers shared by the category and submission features.
"""

from __future__ import annotations

import re
from typing import Any

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")
# Characters that force an element of a Postgres array literal to be quoted.
_ARRAY_SPECIAL = re.compile(r'[{}",\\\s]')


def slugify(text: str) -> str:
    """
    "Auto Glass & Repair!" -> "auto-glass-repair". Idempotent.
    """
    slug = (text or "").lower()
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def normalize_slug_array(value: Any) -> list[str]:
    """
    Keep trimmed, non-empty string entries, first occurrence wins.
    """
    if not isinstance(value, list):
        return []
    unique: dict[str, None] = {}
    for entry in value:
        if not isinstance(entry, str):
            continue
        trimmed = entry.strip()
        if trimmed:
            unique[trimmed] = None
    return list(unique)


def _array_element(item: str) -> str:
    escaped = item.replace("\\", "\\\\").replace('"', '\\"')
    if _ARRAY_SPECIAL.search(item) or item.upper() == "NULL":
        return f'"{escaped}"'
    return escaped


def to_array_literal(value: Any) -> str:
    """
    Serialize a list of strings into a Postgres text[] literal: {a,b,"c d"}.

    Non-strings and empty strings are dropped, duplicates collapse. Returns
    "{}" when nothing valid remains.
    """
    if not isinstance(value, list):
        return "{}"
    items = list(dict.fromkeys(v for v in value if isinstance(v, str) and v))
    return "{" + ",".join(_array_element(v) for v in items) + "}"

"""
Pull JSON out of model output.

Models asked for "only JSON" still wrap it in markdown fences or add a
sentence before it. Order of attempts:
1) the whole text
2) the first fenced code block (```json ... ``` or ``` ... ```)
3) the span from the first `{` / `[` to the last matching closer

Only objects and arrays count as a result. Braces inside string values are
not tracked, so the greedy span in step 3 can still fail on odd inputs.
"""

from __future__ import annotations

import json
import re
from typing import Any

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
_NOT_PARSED = object()


class JsonExtractionError(ValueError):
    pass


def _parse_container(text: str) -> Any:
    try:
        value = json.loads(text)
    except (ValueError, RecursionError):
        return _NOT_PARSED
    if isinstance(value, (dict, list)):
        return value
    return _NOT_PARSED


def _bracket_spans(text: str) -> list[str]:
    spans: list[tuple[int, str]] = []
    for opener, closer in (("{", "}"), ("[", "]")):
        start = text.find(opener)
        end = text.rfind(closer)
        if start != -1 and end > start:
            spans.append((start, text[start : end + 1]))
    # Whichever bracket appears first is the more likely payload.
    spans.sort(key=lambda item: item[0])
    return [span for _, span in spans]


def extract_json(text: str) -> Any:
    """
    Return the parsed object or array, or raise JsonExtractionError.
    """
    raw = (text or "").strip()
    if not raw:
        raise JsonExtractionError("Response text is empty.")

    value = _parse_container(raw)
    if value is not _NOT_PARSED:
        return value

    match = _FENCED_BLOCK.search(raw)
    if match:
        value = _parse_container(match.group(1).strip())
        if value is not _NOT_PARSED:
            return value

    for span in _bracket_spans(raw):
        value = _parse_container(span)
        if value is not _NOT_PARSED:
            return value

    raise JsonExtractionError("No JSON object or array found in response text.")

"""
Translate Gemini failures into API errors.

Structured fields on GeminiError are checked first; message substrings are a
fallback for errors that arrive without them.
"""

from __future__ import annotations

import logging

from core.errors import ApiError
from core.gemini import GeminiError

logger = logging.getLogger(__name__)

INVALID_KEY = "invalid_key"
QUOTA = "quota"
SAFETY = "safety"


def classify_ai_error(exc: Exception) -> str | None:
    if isinstance(exc, GeminiError):
        if exc.reason == "API_KEY_INVALID" or exc.status == "UNAUTHENTICATED" or exc.http_status == 401:
            return INVALID_KEY
        if exc.http_status == 429 or exc.status == "RESOURCE_EXHAUSTED":
            return QUOTA
        if exc.block_reason:
            return SAFETY

    message = str(exc)
    if "API_KEY_INVALID" in message:
        return INVALID_KEY
    if "QUOTA_EXCEEDED" in message:
        return QUOTA
    if "SAFETY" in message:
        return SAFETY
    return None


def translate_ai_error(
    exc: Exception,
    *,
    retry_hint: str,
    fallback_message: str,
) -> ApiError:
    kind = classify_ai_error(exc)
    logger.error("gemini_failed kind=%s error=%s", kind, exc)

    if kind == INVALID_KEY:
        return ApiError(401, "Invalid Gemini API key. Please check your configuration.")
    if kind == QUOTA:
        return ApiError(429, "Gemini API quota exceeded. Please check your API usage and billing.")
    if kind == SAFETY:
        return ApiError(400, f"Content was blocked by Gemini safety filters. {retry_hint}")
    return ApiError(500, fallback_message)

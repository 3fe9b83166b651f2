"""
AI-assisted business extraction.

Flow:
1) Validate input and check that a Gemini key is configured
2) Ask Gemini (optionally grounded in Google Search) for JSON
3) Pull JSON out of the response text
4) Normalize into submission-shaped records (status "pending")

Nothing is written to the database here; the admin reviews and saves.
"""

from __future__ import annotations

import logging
from typing import Any

from core.config import Settings
from core.errors import ApiError
from core.gemini import GeminiClient, GeminiError

from . import prompts, records, schemas
from .errors import translate_ai_error
from .parsing import JsonExtractionError, extract_json

logger = logging.getLogger(__name__)

GOOGLE_URL_MARKERS = ("google.com", "maps.app.goo.gl", "share.google")


def _require_key(gemini: GeminiClient) -> None:
    if not gemini.is_configured:
        raise ApiError(
            500,
            "Gemini API key not configured. Please add GEMINI_API_KEY to your environment variables.",
        )


async def extract_from_url(
    gemini: GeminiClient,
    payload: schemas.ExtractFromUrlRequest,
    *,
    settings: Settings,
) -> dict[str, Any]:
    _require_key(gemini)

    url = (payload.url or "").strip()
    if not url:
        raise ApiError(400, "URL is required")
    if not any(marker in url for marker in GOOGLE_URL_MARKERS):
        raise ApiError(400, "Please provide a valid Google Business Profile or Google Maps URL")

    try:
        text = await gemini.generate_text(
            model=settings.gemini_extract_model,
            prompt=prompts.url_extraction_prompt(
                url,
                city=settings.directory_city,
                region=settings.directory_region,
            ),
        )
    except GeminiError as exc:
        raise translate_ai_error(
            exc,
            retry_hint="Please try a different URL.",
            fallback_message="Failed to extract business data. Please try again later.",
        ) from exc

    if not text:
        raise ApiError(500, "No response from Gemini AI service")

    try:
        extracted = extract_json(text)
    except JsonExtractionError as exc:
        logger.warning("gemini_unparseable_response reason=%s snippet=%r", exc, text[:300])
        raise ApiError(
            500,
            "Failed to parse extracted data. The AI response was not in the expected JSON format. "
            "Please try again.",
        ) from exc

    if not isinstance(extracted, dict) or not extracted.get("name"):
        raise ApiError(
            400,
            "Could not extract business name from the provided URL. Please check the URL and try again.",
        )

    logger.info("business_extracted_from_url name=%s", extracted.get("name"))
    return {"success": True, "data": records.normalize_business(extracted)}


async def find_top_businesses(
    gemini: GeminiClient,
    payload: schemas.FindTopBusinessesRequest,
    *,
    settings: Settings,
) -> dict[str, Any]:
    _require_key(gemini)

    category_name = (payload.category_name or "").strip()
    city_name = (payload.city_name or "").strip()
    if not category_name or not city_name:
        raise ApiError(400, "Category name and city name are required")

    logger.info("top_business_search_started category=%s city=%s", category_name, city_name)
    try:
        text = await gemini.generate_text(
            model=settings.gemini_search_model,
            prompt=prompts.top_businesses_prompt(category_name, city_name),
            google_search=True,
        )
    except GeminiError as exc:
        raise translate_ai_error(
            exc,
            retry_hint="Please try a different search.",
            fallback_message="Failed to find businesses. Please try again later.",
        ) from exc

    if not text:
        raise ApiError(500, "No response from Gemini AI service")

    try:
        found = extract_json(text)
    except JsonExtractionError as exc:
        logger.warning("gemini_unparseable_response reason=%s snippet=%r", exc, text[:300])
        raise ApiError(
            500,
            "Failed to parse business data from Gemini response. "
            "The AI response was not in the expected JSON format.",
        ) from exc

    if not isinstance(found, list):
        raise ApiError(500, "Gemini response was not a valid array of businesses")

    city_lower = city_name.lower()
    businesses = [
        records.normalize_business(item, email_default=None, format_phone=True)
        for item in found
        if isinstance(item, dict)
        and item.get("name")
        and isinstance(item.get("address"), str)
        and city_lower in item["address"].lower()
    ]

    if not businesses:
        raise ApiError(
            400,
            f'No businesses found for "{category_name}" in "{city_name}". Please try different search terms.',
        )

    logger.info("top_business_search_done category=%s city=%s count=%s", category_name, city_name, len(businesses))
    return {
        "success": True,
        "data": businesses,
        "searchTerms": {"category": category_name, "city": city_name},
        "metadata": {
            "method": "gemini_grounding",
            "businessCount": len(businesses),
            "groundingEnabled": True,
        },
    }

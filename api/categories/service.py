"""
Category-page business logic.

Slug uniqueness is checked with a read before each insert/update. The read
and the write are not atomic, so a unique-violation from the database on the
write path is also reported as a conflict.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from core.config import Settings
from core.errors import ApiError, missing_fields
from core.supabase import SupabaseClient, SupabaseError
from core.text import slugify

from . import repository, schemas

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _category_values(payload: schemas.CategoryFields, *, default_icon: str) -> dict[str, Any]:
    return {
        "page_title": payload.page_title,
        "category_name": payload.category_name,
        "slug": payload.slug,
        "description": payload.description,
        "icon_name": payload.icon_name or default_icon,
        "featured_business_1_id": payload.featured_business_1_id or None,
        "featured_business_2_id": payload.featured_business_2_id or None,
        "featured_business_3_id": payload.featured_business_3_id or None,
    }


def _has_required(payload: schemas.CategoryFields) -> bool:
    return all([payload.page_title, payload.category_name, payload.slug, payload.description])


def _slug_conflict(exc: SupabaseError) -> ApiError | None:
    if exc.code == UNIQUE_VIOLATION:
        return ApiError(409, "Slug already exists", code=exc.code)
    return None


async def get_category(db: SupabaseClient, category_id: str) -> dict[str, Any]:
    category_id = (category_id or "").strip()
    if not category_id:
        raise ApiError(400, "Missing category ID")

    row = await repository.get_category(db, category_id)
    if row is None:
        raise ApiError(404, "Category not found")
    return row


async def create_category(
    db: SupabaseClient,
    payload: schemas.CreateCategoryRequest,
    *,
    default_icon: str,
) -> dict[str, Any]:
    if not _has_required(payload):
        raise missing_fields()

    if await repository.find_by_slug(db, str(payload.slug)) is not None:
        raise ApiError(409, "Slug already exists")

    try:
        rows = await repository.insert_category(db, _category_values(payload, default_icon=default_icon))
    except SupabaseError as exc:
        conflict = _slug_conflict(exc)
        if conflict is None:
            raise
        raise conflict from exc

    logger.info("category_created slug=%s", payload.slug)
    return {"success": True, "data": rows}


async def create_from_submission(
    db: SupabaseClient,
    payload: schemas.CreateFromSubmissionRequest,
    *,
    settings: Settings,
) -> dict[str, Any]:
    """
    Turn a suggested category name from a submission into a category page.
    """
    category_name = (payload.new_category or "").strip()
    if not category_name:
        raise ApiError(400, "Category name is required")

    slug = slugify(category_name)
    if not slug:
        raise ApiError(400, "Invalid category name - cannot generate valid slug")

    existing = await repository.find_by_slug(db, slug)
    if existing is not None:
        raise ApiError(
            409,
            f'Category already exists: "{existing.get("category_name")}" (slug: {slug})',
        )

    city = settings.directory_city
    lower_name = category_name.lower()
    values = {
        "page_title": f"{category_name} - {city}'s Best",
        "category_name": category_name,
        "slug": slug,
        "description": (
            f"Find the best {lower_name} businesses in {city}, {settings.directory_region}. "
            f"Discover top-rated local services and professionals in the {lower_name} category."
        ),
        # Admin can pick a better icon later.
        "icon_name": settings.default_category_icon,
        "featured_business_1_id": None,
        "featured_business_2_id": None,
        "featured_business_3_id": None,
    }

    try:
        rows = await repository.insert_category(db, values)
    except SupabaseError as exc:
        conflict = _slug_conflict(exc)
        if conflict is None:
            raise
        raise conflict from exc

    logger.info("category_created_from_submission slug=%s", slug)
    return {
        "success": True,
        "data": rows[0] if rows else None,
        "message": f'Category "{category_name}" created successfully',
    }


async def update_category(
    db: SupabaseClient,
    payload: schemas.UpdateCategoryRequest,
    *,
    default_icon: str,
) -> dict[str, Any]:
    if not payload.id or not _has_required(payload):
        raise missing_fields()

    # Keeping its own slug is fine; taking another row's slug is not.
    if await repository.find_by_slug(db, str(payload.slug), exclude_id=payload.id) is not None:
        raise ApiError(409, "Slug already exists")

    values = _category_values(payload, default_icon=default_icon)
    values["updated_at"] = _utc_now_iso()

    try:
        rows = await repository.update_category(db, payload.id, values)
    except SupabaseError as exc:
        conflict = _slug_conflict(exc)
        if conflict is None:
            raise
        raise conflict from exc

    if not rows:
        raise ApiError(404, "Category not found")

    logger.info("category_updated id=%s slug=%s", payload.id, payload.slug)
    return {"success": True, "data": rows}


async def delete_category(db: SupabaseClient, payload: schemas.DeleteCategoryRequest) -> dict[str, Any]:
    if not payload.id:
        raise ApiError(400, "Missing category ID")

    rows = await repository.delete_category(db, payload.id)
    logger.info("category_deleted id=%s deleted=%s", payload.id, len(rows))
    return {"success": True, "data": rows}


async def featured_status(db: SupabaseClient, business_id: str) -> dict[str, Any]:
    """
    Where is this business featured? Returns [{slug, position}, ...].
    """
    business_id = (business_id or "").strip()
    if not business_id:
        raise ApiError(400, "Missing businessId parameter")

    rows = await repository.list_featuring_business(db, business_id)

    placements: list[dict[str, Any]] = []
    for row in rows:
        for position, column in enumerate(repository.FEATURED_COLUMNS, start=1):
            value = row.get(column)
            if value is not None and str(value) == business_id:
                placements.append({"slug": row.get("slug"), "position": position})

    return {"success": True, "featuredCategories": placements}

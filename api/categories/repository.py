"""
Category-page persistence (PostgREST through the service-role client).
"""

from __future__ import annotations

from typing import Any

from core.supabase import SupabaseClient, eq, neq, quote

TABLE = "category_pages"
FEATURED_COLUMNS = (
    "featured_business_1_id",
    "featured_business_2_id",
    "featured_business_3_id",
)


async def get_category(db: SupabaseClient, category_id: int | str) -> dict[str, Any] | None:
    return await db.select_one(TABLE, filters={"id": eq(category_id)})


async def find_by_slug(
    db: SupabaseClient,
    slug: str,
    *,
    exclude_id: int | str | None = None,
) -> dict[str, Any] | None:
    """
    Look up a category by slug, optionally ignoring one row (the row being updated).
    """
    filters = {"slug": eq(slug)}
    if exclude_id is not None:
        filters["id"] = neq(exclude_id)
    return await db.select_one(TABLE, columns="id, category_name", filters=filters)


async def insert_category(db: SupabaseClient, values: dict[str, Any]) -> list[dict[str, Any]]:
    return await db.insert(TABLE, [values])


async def update_category(
    db: SupabaseClient,
    category_id: int | str,
    values: dict[str, Any],
) -> list[dict[str, Any]]:
    return await db.update(TABLE, values, filters={"id": eq(category_id)})


async def delete_category(db: SupabaseClient, category_id: int | str) -> list[dict[str, Any]]:
    return await db.delete(TABLE, filters={"id": eq(category_id)})


async def list_featuring_business(db: SupabaseClient, business_id: str) -> list[dict[str, Any]]:
    """
    Category pages that reference the business in any featured slot.
    """
    condition = ",".join(f"{column}.eq.{quote(business_id)}" for column in FEATURED_COLUMNS)
    return await db.select(
        TABLE,
        columns="slug, " + ", ".join(FEATURED_COLUMNS),
        filters={"or": f"({condition})"},
    )

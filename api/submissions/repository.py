"""
Business-submission persistence.

Admin writes go through the service-role client; the public form inserts
through the anon client and relies on row-level security.
"""

from __future__ import annotations

from typing import Any

from core.supabase import SupabaseClient, eq

TABLE = "business_submissions"
SAVE_WITH_FEATURED_RPC = "admin_save_submission_with_featured"


async def get_submission(
    db: SupabaseClient,
    submission_id: int | str,
    *,
    columns: str = "*",
) -> dict[str, Any] | None:
    return await db.select_one(TABLE, columns=columns, filters={"id": eq(submission_id)})


async def insert_submission(db: SupabaseClient, values: dict[str, Any], *, returning: bool = True) -> list[dict[str, Any]]:
    return await db.insert(TABLE, [values], returning=returning)


async def update_submission(
    db: SupabaseClient,
    submission_id: int | str,
    values: dict[str, Any],
) -> list[dict[str, Any]]:
    return await db.update(TABLE, values, filters={"id": eq(submission_id)})


async def delete_submission(db: SupabaseClient, submission_id: int | str) -> list[dict[str, Any]]:
    return await db.delete(TABLE, filters={"id": eq(submission_id)})


async def save_with_featured(
    db: SupabaseClient,
    *,
    submission_data: dict[str, Any],
    categories_to_feature: list[dict[str, Any]],
    categories_to_unfeature: list[dict[str, Any]],
) -> Any:
    """
    Save the submission and move its featured slots in one database call.

    Returns {"submission": {...}, "featured": [...], "unfeatured": [...]}.
    """
    return await db.rpc(
        SAVE_WITH_FEATURED_RPC,
        {
            "submission_data": submission_data,
            "categories_to_feature": categories_to_feature,
            "categories_to_unfeature": categories_to_unfeature,
        },
    )

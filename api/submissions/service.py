"""
Business-submission business logic.

Flow for an admin save:
1) Check required fields and status
2) Sanitize categories into a Postgres array literal
3) Normalize featured-slot changes
4) Hand everything to one RPC so the submission and category pages change together
"""

from __future__ import annotations

import json
import logging
import math
import re
from datetime import datetime, timezone
from typing import Any

from core.errors import ApiError, missing_fields
from core.supabase import SupabaseClient, SupabaseError
from core.text import normalize_slug_array, to_array_literal

from . import repository, schemas

logger = logging.getLogger(__name__)

VALID_STATUSES = ("pending", "approved", "rejected")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_position(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def normalize_featured_placements(value: Any) -> list[dict[str, Any]]:
    """
    Keep {slug, position} entries with a non-empty slug and position 1..3.
    """
    if not isinstance(value, list):
        return []

    placements: list[dict[str, Any]] = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        slug = entry.get("slug")
        slug = slug.strip() if isinstance(slug, str) else ""
        position = _parse_position(entry.get("position"))
        if slug and position is not None and 1 <= position <= 3:
            placements.append({"slug": slug, "position": position})
    return placements


def _check_required(payload: schemas.SubmissionFields) -> None:
    if not all(
        [
            payload.name,
            payload.address,
            payload.phone,
            payload.email,
            payload.website,
            payload.description,
        ]
    ):
        raise missing_fields()


def _submission_record(payload: schemas.SubmissionFields, *, status: str) -> dict[str, Any]:
    categories = normalize_slug_array(payload.categories)
    new_category = (payload.new_category or "").strip()
    if not categories and not new_category:
        raise ApiError(400, "Either categories must be selected or a new category must be suggested")

    record: dict[str, Any] = {
        "name": payload.name,
        "address": payload.address,
        "phone": payload.phone,
        "email": payload.email,
        "website": payload.website,
        "categories": to_array_literal(categories),
        "new_category": new_category or None,
        "description": payload.description,
        "backlink_url": payload.backlink_url or None,
        "friends": payload.friends if isinstance(payload.friends, bool) else False,
        "similar": payload.similar if isinstance(payload.similar, bool) else False,
        "status": status,
    }
    if payload.logo_url:
        record["logo_url"] = payload.logo_url
    return record


def _structured_details(details: Any) -> dict[str, Any] | None:
    if isinstance(details, dict):
        return details
    if isinstance(details, str):
        try:
            parsed = json.loads(details)
        except ValueError:
            return None
        return parsed if isinstance(parsed, dict) else None
    return None


def rpc_error(exc: SupabaseError) -> ApiError:
    """
    Map an RPC failure to an API error.

    The procedure raises with JSON details such as
    {"type": "conflict", "message": "...", "code": "..."}; plain
    `raise exception` (P0001) is treated as bad input.
    """
    logger.error("rpc_failed code=%s message=%s", exc.code, exc.message)
    structured = _structured_details(exc.details) or {}

    error_type = structured.get("type")
    if error_type == "validation_error":
        status_code = 400
    elif error_type == "conflict":
        status_code = 409
    elif error_type == "not_found":
        status_code = 404
    elif exc.code == "P0001":
        status_code = 400
    else:
        status_code = 500

    return ApiError(
        status_code,
        str(structured.get("message") or exc.message or "Database error"),
        details=structured or exc.details or None,
        code=str(structured.get("code") or exc.code or "rpc_error"),
    )


async def get_submission(db: SupabaseClient, submission_id: str) -> dict[str, Any]:
    submission_id = (submission_id or "").strip()
    if not submission_id:
        raise ApiError(400, "Missing submission ID")

    row = await repository.get_submission(db, submission_id)
    if row is None:
        raise ApiError(404, "Submission not found")
    return row


async def save_submission(db: SupabaseClient, payload: schemas.SaveSubmissionRequest) -> dict[str, Any]:
    _check_required(payload)
    if payload.status and payload.status not in VALID_STATUSES:
        raise ApiError(400, "Invalid status")

    submission_data = _submission_record(payload, status=payload.status or "pending")
    if payload.id:
        submission_data["id"] = payload.id

    try:
        result = await repository.save_with_featured(
            db,
            submission_data=submission_data,
            categories_to_feature=normalize_featured_placements(payload.categories_to_feature),
            categories_to_unfeature=normalize_featured_placements(payload.categories_to_unfeature),
        )
    except SupabaseError as exc:
        raise rpc_error(exc) from exc

    result = result if isinstance(result, dict) else {}
    submission = result.get("submission") or None
    featured = result.get("featured") or []
    unfeatured = result.get("unfeatured") or []
    logger.info(
        "submission_saved id=%s featured=%s unfeatured=%s",
        submission.get("id") if isinstance(submission, dict) else None,
        len(featured),
        len(unfeatured),
    )
    return {"success": True, "data": submission, "featured": featured, "unfeatured": unfeatured}


async def submit_public(db: SupabaseClient, payload: schemas.PublicSubmissionRequest) -> dict[str, Any]:
    """
    Public form: always lands as `pending` for admin review.
    """
    _check_required(payload)
    record = _submission_record(payload, status="pending")

    # Anonymous visitors may insert but not read back.
    await repository.insert_submission(db, record, returning=False)
    logger.info("submission_received name=%s", payload.name)
    return {"success": True, "message": "Submission received and pending review"}


async def delete_submission(db: SupabaseClient, payload: schemas.DeleteSubmissionRequest) -> dict[str, Any]:
    if not payload.id:
        raise ApiError(400, "Missing submission ID")

    existing = await repository.get_submission(db, payload.id, columns="id, name")
    if existing is None:
        raise ApiError(404, "Submission not found")

    rows = await repository.delete_submission(db, payload.id)
    logger.info("submission_deleted id=%s", payload.id)
    return {
        "success": True,
        "message": f'Submission "{existing.get("name")}" deleted successfully',
        "data": rows,
    }


async def update_status(db: SupabaseClient, payload: schemas.UpdateStatusRequest) -> dict[str, Any]:
    if not payload.id or not payload.status:
        raise ApiError(400, "Missing required fields (id or status)")
    if payload.status not in VALID_STATUSES:
        raise ApiError(400, "Invalid status")

    rows = await repository.update_submission(
        db,
        payload.id,
        {"status": payload.status, "updated_at": _utc_now_iso()},
    )
    logger.info("submission_status_updated id=%s status=%s", payload.id, payload.status)
    return {"success": True, "data": rows}

"""
Category-page admin endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from core.context import AppContext, get_context
from core.http import json_body

from . import schemas, service

router = APIRouter()


@router.get("/api/admin/categories/{category_id}")
async def get_category(
    category_id: str,
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.get_category(ctx.admin_db, category_id)


@router.post("/api/admin/categories/create")
async def create_category(
    payload: schemas.CreateCategoryRequest = Depends(json_body(schemas.CreateCategoryRequest)),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.create_category(
        ctx.admin_db,
        payload,
        default_icon=ctx.settings.default_category_icon,
    )


@router.post("/api/admin/categories/create-from-submission")
async def create_from_submission(
    payload: schemas.CreateFromSubmissionRequest = Depends(json_body(schemas.CreateFromSubmissionRequest)),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.create_from_submission(ctx.admin_db, payload, settings=ctx.settings)


@router.post("/api/admin/categories/update")
async def update_category(
    payload: schemas.UpdateCategoryRequest = Depends(json_body(schemas.UpdateCategoryRequest)),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.update_category(
        ctx.admin_db,
        payload,
        default_icon=ctx.settings.default_category_icon,
    )


@router.post("/api/admin/categories/delete")
async def delete_category(
    payload: schemas.DeleteCategoryRequest = Depends(json_body(schemas.DeleteCategoryRequest)),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.delete_category(ctx.admin_db, payload)


@router.get("/api/admin/get-business-featured-status")
async def get_business_featured_status(
    business_id: str = Query(default="", alias="businessId"),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.featured_status(ctx.admin_db, business_id)

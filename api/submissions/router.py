"""
Business-submission endpoints (admin + public form).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.context import AppContext, get_context
from core.http import json_body

from . import schemas, service

router = APIRouter()


@router.get("/api/admin/submissions/{submission_id}")
async def get_submission(
    submission_id: str,
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.get_submission(ctx.admin_db, submission_id)


@router.post("/api/admin/submissions/create")
async def save_submission(
    payload: schemas.SaveSubmissionRequest = Depends(json_body(schemas.SaveSubmissionRequest)),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.save_submission(ctx.admin_db, payload)


@router.post("/api/admin/submissions/delete")
async def delete_submission(
    payload: schemas.DeleteSubmissionRequest = Depends(json_body(schemas.DeleteSubmissionRequest)),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.delete_submission(ctx.admin_db, payload)


@router.post("/api/admin/update-submission")
async def update_submission_status(
    payload: schemas.UpdateStatusRequest = Depends(json_body(schemas.UpdateStatusRequest)),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.update_status(ctx.admin_db, payload)


@router.post("/api/submissions")
async def submit_business(
    payload: schemas.PublicSubmissionRequest = Depends(json_body(schemas.PublicSubmissionRequest)),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.submit_public(ctx.public_db, payload)

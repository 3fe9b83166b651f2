"""
AI extraction endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.context import AppContext, get_context
from core.http import json_body

from . import schemas, service

router = APIRouter()


@router.post("/api/admin/extract-business-from-url")
async def extract_business_from_url(
    payload: schemas.ExtractFromUrlRequest = Depends(json_body(schemas.ExtractFromUrlRequest)),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.extract_from_url(ctx.gemini, payload, settings=ctx.settings)


@router.post("/api/admin/find-top-businesses")
async def find_top_businesses(
    payload: schemas.FindTopBusinessesRequest = Depends(json_body(schemas.FindTopBusinessesRequest)),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.find_top_businesses(ctx.gemini, payload, settings=ctx.settings)

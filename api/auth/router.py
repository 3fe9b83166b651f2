"""
Auth session-sync endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.context import AppContext, get_context
from core.http import json_body

from . import dependencies, schemas, service
from .cookies import SessionCookieStore

router = APIRouter()


@router.post("/api/auth/set-session")
async def set_session(
    payload: schemas.SetSessionRequest = Depends(
        json_body(
            schemas.SetSessionRequest,
            empty_message="Invalid JSON payload",
            malformed_message="Invalid JSON payload",
        )
    ),
    cookies: SessionCookieStore = Depends(dependencies.get_session_cookies),
    ctx: AppContext = Depends(get_context),
) -> dict:
    return await service.sync_session(
        ctx.public_db,
        payload,
        cookies,
        jwt_secret=ctx.settings.supabase_jwt_secret,
    )

"""
Session bridging: mirror browser auth events into server-side cookies.

SIGNED_IN  -> confirm the session with the auth service, write the cookie
SIGNED_OUT -> revoke the stored session, delete the cookie
"""

from __future__ import annotations

import logging
from typing import Any

from core.errors import ApiError
from core.supabase import SupabaseClient, SupabaseError

from . import schemas, security
from .cookies import SessionCookieStore

logger = logging.getLogger(__name__)

# Sign-out of a session the auth service no longer knows about is not a failure.
_STALE_SESSION_STATUSES = {401, 403, 404}


async def _establish_session(
    db: SupabaseClient,
    session: dict[str, Any],
    *,
    jwt_secret: str,
) -> dict[str, Any]:
    access_token = str(session.get("access_token") or "").strip()
    refresh_token = str(session.get("refresh_token") or "").strip()
    if not access_token or not refresh_token:
        raise ApiError(400, "Missing session data")

    try:
        claims = security.read_access_claims(access_token, jwt_secret=jwt_secret)
    except security.SessionTokenError as exc:
        raise ApiError(400, str(exc)) from exc

    try:
        if security.is_expired(claims):
            refreshed = await db.refresh_session(refresh_token)
            access_token = str(refreshed["access_token"])
            refresh_token = str(refreshed.get("refresh_token") or refresh_token)
            claims = security.read_access_claims(access_token, jwt_secret=jwt_secret)
        user = await db.get_user(access_token)
    except (SupabaseError, security.SessionTokenError) as exc:
        logger.error("session_set_failed error=%s", exc)
        raise ApiError(500, "Failed to set session") from exc

    expires_at = claims.get("exp")
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "expires_at": expires_at,
        "expires_in": max(0, int(expires_at) - security.now_epoch_s()) if isinstance(expires_at, (int, float)) else None,
        "user": user,
    }


async def sync_session(
    db: SupabaseClient,
    payload: schemas.SetSessionRequest,
    cookies: SessionCookieStore,
    *,
    jwt_secret: str = "",
) -> dict[str, bool]:
    event = (payload.event or "").strip()
    if not event:
        raise ApiError(400, "Missing event type")

    if event == schemas.SIGNED_IN:
        if not payload.session:
            raise ApiError(400, "Missing session data")
        stored = await _establish_session(db, payload.session, jwt_secret=jwt_secret)
        cookies.write(stored)
        logger.info("session_set user_id=%s", stored["user"].get("id"))
        return {"success": True}

    if event == schemas.SIGNED_OUT:
        current = cookies.read() or {}
        access_token = str(current.get("access_token") or "").strip()
        if access_token:
            try:
                await db.sign_out(access_token)
            except SupabaseError as exc:
                if exc.status_code not in _STALE_SESSION_STATUSES:
                    logger.error("session_clear_failed error=%s", exc)
                    raise ApiError(500, "Failed to clear session") from exc
        cookies.clear()
        logger.info("session_cleared")
        return {"success": True}

    raise ApiError(400, "Unsupported event type")

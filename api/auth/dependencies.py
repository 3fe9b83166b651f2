"""
Auth dependencies for session-bridging routes.
"""

from __future__ import annotations

from fastapi import Depends, Request, Response

from core.context import AppContext, get_context

from .cookies import FastAPICookieAdapter, SessionCookieStore


def get_session_cookies(
    request: Request,
    response: Response,
    ctx: AppContext = Depends(get_context),
) -> SessionCookieStore:
    adapter = FastAPICookieAdapter(request, response, secure=ctx.settings.cookie_secure)
    return SessionCookieStore(adapter, name=ctx.settings.session_cookie_name)

"""
Per-process application context.

FastAPI builds it once on startup and closes it on shutdown (see
`api/main.py`). Handlers receive it through the `get_context` dependency, so
tests can swap in fakes with `app.dependency_overrides`.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from .config import Settings
from .gemini import GeminiClient
from .supabase import SupabaseClient


@dataclass
class AppContext:
    settings: Settings
    # Service-role client: bypasses row-level security. Admin routes only.
    admin_db: SupabaseClient
    # Anon-key client: public submissions and auth calls.
    public_db: SupabaseClient
    gemini: GeminiClient

    async def aclose(self) -> None:
        await self.admin_db.aclose()
        await self.public_db.aclose()


def build_context(settings: Settings) -> AppContext:
    return AppContext(
        settings=settings,
        admin_db=SupabaseClient(
            url=settings.supabase_url,
            key=settings.supabase_service_role_key,
            timeout_s=settings.supabase_timeout_s,
        ),
        public_db=SupabaseClient(
            url=settings.supabase_url,
            key=settings.supabase_anon_key,
            timeout_s=settings.supabase_timeout_s,
        ),
        gemini=GeminiClient(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            timeout_s=settings.gemini_timeout_s,
        ),
    )


def get_context(request: Request) -> AppContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("App context is not initialized. Build it on startup.")
    return context

"""
Process settings, read from the environment once at startup.

Required:
- SUPABASE_URL (or PUBLIC_SUPABASE_URL)
- SUPABASE_SERVICE_ROLE_KEY
- SUPABASE_ANON_KEY (or PUBLIC_SUPABASE_ANON_KEY)

GEMINI_API_KEY is checked per request by the AI endpoints, so the CRUD
endpoints keep working on deployments without it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlsplit


DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_EXTRACT_MODEL = "gemini-1.5-flash"
DEFAULT_SEARCH_MODEL = "gemini-2.5-flash"


def _env_str(*names: str, default: str = "") -> str:
    for name in names:
        raw = os.environ.get(name, "").strip()
        if raw:
            return raw
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return raw not in {"0", "false", "False", "no"}


def _require(*names: str) -> str:
    value = _env_str(*names)
    if not value:
        raise RuntimeError(f"{' / '.join(names)} is not set.")
    return value


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_service_role_key: str
    supabase_anon_key: str
    supabase_jwt_secret: str = ""
    supabase_timeout_s: float = 30.0
    gemini_api_key: str = ""
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    gemini_extract_model: str = DEFAULT_EXTRACT_MODEL
    gemini_search_model: str = DEFAULT_SEARCH_MODEL
    gemini_timeout_s: float = 120.0
    directory_city: str = "Abbotsford"
    directory_region: str = "BC"
    default_category_icon: str = "Building"
    cookie_secure: bool = True
    cors_origins: tuple[str, ...] = ("http://localhost:4321",)
    log_level: str = "INFO"

    @property
    def project_ref(self) -> str:
        """
        First label of the Supabase host, e.g. `abcd` for abcd.supabase.co.
        """
        host = urlsplit(self.supabase_url).hostname or ""
        return host.split(".", 1)[0]

    @property
    def session_cookie_name(self) -> str:
        return f"sb-{self.project_ref}-auth-token"


def cors_origins() -> tuple[str, ...]:
    # Middleware is installed at import time, before startup loads Settings.
    raw = _env_str("CORS_ORIGINS", default="http://localhost:4321")
    return tuple(o.strip() for o in raw.split(",") if o.strip())


def load_settings() -> Settings:
    """
    Build settings from the environment. Raises RuntimeError when a required
    variable is missing.
    """
    return Settings(
        supabase_url=_require("SUPABASE_URL", "PUBLIC_SUPABASE_URL").rstrip("/"),
        supabase_service_role_key=_require("SUPABASE_SERVICE_ROLE_KEY"),
        supabase_anon_key=_require("SUPABASE_ANON_KEY", "PUBLIC_SUPABASE_ANON_KEY"),
        supabase_jwt_secret=_env_str("SUPABASE_JWT_SECRET"),
        supabase_timeout_s=_env_float("SUPABASE_TIMEOUT_S", 30.0),
        gemini_api_key=_env_str("GEMINI_API_KEY"),
        gemini_base_url=_env_str("GEMINI_BASE_URL", default=DEFAULT_GEMINI_BASE_URL),
        gemini_extract_model=_env_str("GEMINI_EXTRACT_MODEL", default=DEFAULT_EXTRACT_MODEL),
        gemini_search_model=_env_str("GEMINI_SEARCH_MODEL", default=DEFAULT_SEARCH_MODEL),
        gemini_timeout_s=_env_float("GEMINI_TIMEOUT_S", 120.0),
        directory_city=_env_str("DIRECTORY_CITY", default="Abbotsford"),
        directory_region=_env_str("DIRECTORY_REGION", default="BC"),
        default_category_icon=_env_str("DEFAULT_CATEGORY_ICON", default="Building"),
        cookie_secure=_env_bool("COOKIE_SECURE", True),
        cors_origins=cors_origins(),
        log_level=_env_str("LOG_LEVEL", default="INFO").upper(),
    )

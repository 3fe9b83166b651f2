"""
Auth API schemas (request models).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


class SetSessionRequest(BaseModel):
    event: str | None = None
    # Browser session as handed out by the auth client: access_token, refresh_token, user, ...
    session: dict[str, Any] | None = None

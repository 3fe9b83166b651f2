"""
API error type rendered as {"error": ..., "details": ..., "code": ...}.

Services raise `ApiError`; `main.py` registers the handler that turns it into
a JSON response. `details` and `code` are omitted when not set.
"""

from __future__ import annotations

import logging
from typing import Any

from .supabase import SupabaseError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(
        self,
        status_code: int,
        error: str,
        *,
        details: Any = None,
        code: str | None = None,
    ) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details
        self.code = code

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        if self.code is not None:
            body["code"] = self.code
        return body


def missing_fields() -> ApiError:
    return ApiError(400, "Missing required fields")


def database_error(exc: SupabaseError) -> ApiError:
    logger.error("database_error code=%s message=%s", exc.code, exc.message)
    return ApiError(500, "Database error", details=exc.message, code=exc.code)

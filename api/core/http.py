"""
Request body helpers.

Handlers read the raw body themselves so that an empty body and malformed
JSON are reported as 400 with a readable message instead of FastAPI's 422.
"""

from __future__ import annotations

import json
from typing import Any, Callable, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from .errors import ApiError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _reject_constant(name: str) -> Any:
    # NaN / Infinity / -Infinity are not JSON.
    raise ValueError(f"Invalid JSON constant: {name}")


async def read_json(
    request: Request,
    *,
    empty_message: str = "Empty request body",
    malformed_message: str = "Malformed JSON in request body",
) -> Any:
    raw = await request.body()
    if not raw.strip():
        raise ApiError(400, empty_message)
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise ApiError(400, malformed_message) from exc


def json_body(
    model: type[ModelT],
    *,
    empty_message: str = "Empty request body",
    malformed_message: str = "Malformed JSON in request body",
) -> Callable[[Request], Any]:
    """
    Build a dependency that parses the body into `model`.
    """

    async def dependency(request: Request) -> ModelT:
        data = await read_json(
            request,
            empty_message=empty_message,
            malformed_message=malformed_message,
        )
        if not isinstance(data, dict):
            raise ApiError(400, "Request body must be a JSON object")
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            details = [
                {"loc": [str(part) for part in err.get("loc", ())], "msg": str(err.get("msg") or "")}
                for err in exc.errors()
            ]
            raise ApiError(400, "Invalid request body", details=details) from exc

    return dependency

"""
Session cookie storage.

The session is stored as "base64-" + base64url(JSON) under
`sb-<project-ref>-auth-token`. Browsers cap a cookie at ~4KB, so large
sessions are split into `<name>.0`, `<name>.1`, ... and joined on read.
"""

from __future__ import annotations

import base64
import json
from typing import Any, Protocol

from fastapi import Request, Response

MAX_CHUNK_SIZE = 3180
DEFAULT_MAX_AGE_S = 400 * 24 * 60 * 60
BASE64_PREFIX = "base64-"


class CookieAdapter(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, options: dict[str, Any]) -> None: ...

    def delete(self, key: str, options: dict[str, Any]) -> None: ...


class FastAPICookieAdapter:
    """
    Reads cookies from the incoming request, writes them to the outgoing response.
    """

    def __init__(self, request: Request, response: Response, *, secure: bool = True) -> None:
        self._request = request
        self._response = response
        self._secure = secure

    def get(self, key: str) -> str | None:
        return self._request.cookies.get(key)

    def set(self, key: str, value: str, options: dict[str, Any]) -> None:
        options = {"path": "/", **options}
        self._response.set_cookie(
            key,
            value,
            max_age=options.get("max_age"),
            path=options["path"],
            secure=options.get("secure", self._secure),
            httponly=options.get("httponly", False),
            samesite=options.get("samesite", "lax"),
        )

    def delete(self, key: str, options: dict[str, Any]) -> None:
        options = {"path": "/", **options}
        self._response.delete_cookie(
            key,
            path=options["path"],
            secure=options.get("secure", self._secure),
            samesite=options.get("samesite", "lax"),
        )


def encode_session(session: dict[str, Any]) -> str:
    raw = json.dumps(session, separators=(",", ":"), ensure_ascii=True).encode("utf-8")
    return BASE64_PREFIX + base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_session(value: str) -> dict[str, Any] | None:
    text = value or ""
    if text.startswith(BASE64_PREFIX):
        body = text[len(BASE64_PREFIX) :]
        try:
            text = base64.urlsafe_b64decode(body + "=" * (-len(body) % 4)).decode("utf-8")
        except ValueError:
            return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


class SessionCookieStore:
    def __init__(
        self,
        adapter: CookieAdapter,
        *,
        name: str,
        max_age_s: int = DEFAULT_MAX_AGE_S,
    ) -> None:
        self._adapter = adapter
        self.name = name
        self.max_age_s = max_age_s

    def _existing_chunks(self) -> list[str]:
        keys: list[str] = []
        i = 0
        while self._adapter.get(f"{self.name}.{i}") is not None:
            keys.append(f"{self.name}.{i}")
            i += 1
        return keys

    def read(self) -> dict[str, Any] | None:
        value = self._adapter.get(self.name)
        if value is None:
            chunks = [self._adapter.get(key) or "" for key in self._existing_chunks()]
            if not chunks:
                return None
            value = "".join(chunks)
        return decode_session(value)

    def write(self, session: dict[str, Any]) -> None:
        value = encode_session(session)
        options = {"max_age": self.max_age_s}
        stale = self._existing_chunks()

        if len(value) <= MAX_CHUNK_SIZE:
            self._adapter.set(self.name, value, options)
            for key in stale:
                self._adapter.delete(key, {})
            return

        pieces = [value[i : i + MAX_CHUNK_SIZE] for i in range(0, len(value), MAX_CHUNK_SIZE)]
        for i, piece in enumerate(pieces):
            self._adapter.set(f"{self.name}.{i}", piece, options)
        for key in stale[len(pieces) :]:
            self._adapter.delete(key, {})
        if self._adapter.get(self.name) is not None:
            self._adapter.delete(self.name, {})

    def clear(self) -> None:
        if self._adapter.get(self.name) is not None:
            self._adapter.delete(self.name, {})
        for key in self._existing_chunks():
            self._adapter.delete(key, {})

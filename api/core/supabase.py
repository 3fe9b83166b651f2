"""
Supabase HTTP client helpers.

Used endpoints:
- /rest/v1/<table>         -> PostgREST table access (select/insert/update/delete)
- /rest/v1/rpc/<function>  -> database procedures
- /auth/v1/user            -> resolve the user behind an access token
- /auth/v1/token           -> refresh a session
- /auth/v1/logout          -> revoke a session

Filters use PostgREST query syntax, e.g. {"id": "eq.12", "slug": "neq.abc"}.
Build them with `eq()` / `neq()` so values are formatted the same way everywhere.
"""

from __future__ import annotations

from typing import Any

import httpx


# Database/auth failures are explicit and separable from other runtime errors.
class SupabaseError(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: Any = None,
        hint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.hint = hint
        self.status_code = status_code


def eq(value: Any) -> str:
    return f"eq.{value}"


def neq(value: Any) -> str:
    return f"neq.{value}"


def quote(value: Any) -> str:
    """
    Double-quote a value for use inside `or=(...)` / `in.(...)` lists, where
    `,` `(` `)` would otherwise be read as syntax.
    """
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise SupabaseError("Supabase URL is empty.")
    return base_url.rstrip("/")


def _error_from_response(resp: httpx.Response) -> SupabaseError:
    try:
        data = resp.json()
    except ValueError:
        data = None

    if not isinstance(data, dict):
        # Avoid dumping huge bodies; include a small snippet.
        return SupabaseError(
            f"Supabase request failed: {resp.status_code} {resp.text[:500]}",
            status_code=resp.status_code,
        )

    # PostgREST: {code, message, details, hint}; GoTrue: {error_code, msg} or {error, error_description}.
    message = data.get("message") or data.get("msg") or data.get("error_description") or data.get("error")
    code = data.get("code") if isinstance(data.get("code"), str) else data.get("error_code")
    return SupabaseError(
        str(message or f"Supabase request failed: {resp.status_code}"),
        code=str(code) if code is not None else None,
        details=data.get("details"),
        hint=data.get("hint"),
        status_code=resp.status_code,
    )


class SupabaseClient:
    """
    One client per API key. The service-role client bypasses row-level
    security; the anon client acts as a public visitor.
    """

    def __init__(
        self,
        *,
        url: str,
        key: str,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        key = (key or "").strip()
        if not key:
            raise SupabaseError("Supabase API key is empty.")
        self._http = httpx.AsyncClient(
            base_url=_normalize_base_url(url),
            timeout=timeout_s,
            headers={"apikey": key, "Authorization": f"Bearer {key}"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        try:
            resp = await self._http.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            raise SupabaseError(f"Supabase request failed: {exc}", code="network_error") from exc

        if resp.status_code >= 400:
            raise _error_from_response(resp)
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise SupabaseError(
                f"Supabase returned a non-JSON body: {resp.text[:200]}",
                code="invalid_response",
                status_code=resp.status_code,
            ) from exc

    # -- PostgREST ---------------------------------------------------------

    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: dict[str, str] | None = None,
        order: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"select": columns, **(filters or {})}
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = int(limit)
        rows = await self._request("GET", f"/rest/v1/{table}", params=params)
        return list(rows or [])

    async def select_one(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: dict[str, str] | None = None,
    ) -> dict[str, Any] | None:
        """
        Return the first matching row as a dict (or None).
        """
        rows = await self.select(table, columns=columns, filters=filters, limit=1)
        return rows[0] if rows else None

    async def insert(
        self,
        table: str,
        rows: list[dict[str, Any]],
        *,
        returning: bool = True,
    ) -> list[dict[str, Any]]:
        prefer = "return=representation" if returning else "return=minimal"
        data = await self._request("POST", f"/rest/v1/{table}", json=rows, headers={"Prefer": prefer})
        return list(data or [])

    async def update(
        self,
        table: str,
        values: dict[str, Any],
        *,
        filters: dict[str, str],
    ) -> list[dict[str, Any]]:
        if not filters:
            raise ValueError("update() requires at least one filter.")
        data = await self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=filters,
            json=values,
            headers={"Prefer": "return=representation"},
        )
        return list(data or [])

    async def delete(self, table: str, *, filters: dict[str, str]) -> list[dict[str, Any]]:
        if not filters:
            raise ValueError("delete() requires at least one filter.")
        data = await self._request(
            "DELETE",
            f"/rest/v1/{table}",
            params=filters,
            headers={"Prefer": "return=representation"},
        )
        return list(data or [])

    async def rpc(self, function: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("POST", f"/rest/v1/rpc/{function}", json=params or {})

    # -- GoTrue ------------------------------------------------------------

    async def get_user(self, access_token: str) -> dict[str, Any]:
        data = await self._request(
            "GET",
            "/auth/v1/user",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if not isinstance(data, dict) or not data.get("id"):
            raise SupabaseError("Auth service returned no user.", code="user_not_found")
        return data

    async def refresh_session(self, refresh_token: str) -> dict[str, Any]:
        data = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )
        if not isinstance(data, dict) or not data.get("access_token"):
            raise SupabaseError("Auth service returned no session.", code="session_not_found")
        return data

    async def sign_out(self, access_token: str, *, scope: str = "local") -> None:
        await self._request(
            "POST",
            "/auth/v1/logout",
            params={"scope": scope},
            headers={"Authorization": f"Bearer {access_token}"},
        )

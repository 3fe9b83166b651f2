"""
Shared fixtures: an in-memory stand-in for the Supabase client, a scripted
Gemini client, and a TestClient wired to both through `get_context`.
"""

from __future__ import annotations

import copy
import re
from typing import Any

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.context import AppContext, get_context
from core.gemini import GeminiError
from core.supabase import SupabaseError


_OR_ALTERNATIVE = re.compile(r'(\w+)\.(\w+\.(?:"(?:[^"\\]|\\.)*"|[^,]*))')


def _unquote(operand: str) -> str:
    if len(operand) >= 2 and operand[0] == operand[-1] == '"':
        return re.sub(r"\\(.)", r"\1", operand[1:-1])
    return operand


def _matches(row: dict[str, Any], column: str, expr: str) -> bool:
    op, _, operand = expr.partition(".")
    operand = _unquote(operand)
    value = row.get(column)
    if op == "eq":
        return value is not None and str(value) == operand
    if op == "neq":
        return value is None or str(value) != operand
    raise AssertionError(f"unsupported filter {column}={expr}")


def _row_matches(row: dict[str, Any], filters: dict[str, str] | None) -> bool:
    for column, expr in (filters or {}).items():
        if column == "or":
            # '(a.eq."1",b.eq."1")'
            alternatives = _OR_ALTERNATIVE.findall(expr[1:-1])
            if not any(_matches(row, col, alt) for col, alt in alternatives):
                return False
        elif not _matches(row, column, expr):
            return False
    return True


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str, Any]] = []
        self.errors: dict[str, SupabaseError] = {}
        self.rpc_result: Any = None
        self.users: dict[str, dict[str, Any]] = {}
        self.refreshed: dict[str, dict[str, Any]] = {}
        self.signed_out: list[str] = []
        self._next_id = 1

    def _maybe_fail(self, method: str) -> None:
        if method in self.errors:
            raise self.errors[method]

    async def select(self, table, *, columns="*", filters=None, order=None, limit=None):
        self.calls.append(("select", table, filters))
        self._maybe_fail("select")
        rows = [copy.deepcopy(r) for r in self.tables.get(table, []) if _row_matches(r, filters)]
        return rows[:limit] if limit is not None else rows

    async def select_one(self, table, *, columns="*", filters=None):
        rows = await self.select(table, columns=columns, filters=filters, limit=1)
        return rows[0] if rows else None

    async def insert(self, table, rows, *, returning=True):
        self.calls.append(("insert", table, rows))
        self._maybe_fail("insert")
        stored = []
        for row in rows:
            row = {"id": self._next_id, **row}
            self._next_id += 1
            self.tables.setdefault(table, []).append(row)
            stored.append(copy.deepcopy(row))
        return stored if returning else []

    async def update(self, table, values, *, filters):
        self.calls.append(("update", table, (values, filters)))
        self._maybe_fail("update")
        updated = []
        for row in self.tables.get(table, []):
            if _row_matches(row, filters):
                row.update(values)
                updated.append(copy.deepcopy(row))
        return updated

    async def delete(self, table, *, filters):
        self.calls.append(("delete", table, filters))
        self._maybe_fail("delete")
        kept, removed = [], []
        for row in self.tables.get(table, []):
            (removed if _row_matches(row, filters) else kept).append(row)
        self.tables[table] = kept
        return removed

    async def rpc(self, function, params=None):
        self.calls.append(("rpc", function, params))
        self._maybe_fail("rpc")
        return self.rpc_result

    async def get_user(self, access_token):
        self._maybe_fail("get_user")
        if access_token not in self.users:
            raise SupabaseError("invalid JWT", code="bad_jwt", status_code=401)
        return self.users[access_token]

    async def refresh_session(self, refresh_token):
        self._maybe_fail("refresh_session")
        if refresh_token not in self.refreshed:
            raise SupabaseError("Invalid Refresh Token", code="refresh_token_not_found", status_code=400)
        return self.refreshed[refresh_token]

    async def sign_out(self, access_token, *, scope="local"):
        self._maybe_fail("sign_out")
        self.signed_out.append(access_token)

    async def aclose(self):
        return None


class FakeGemini:
    def __init__(self, *, configured: bool = True) -> None:
        self.configured = configured
        self.responses: list[str | Exception] = []
        self.calls: list[dict[str, Any]] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def generate_text(self, *, model, prompt, google_search=False, temperature=None):
        self.calls.append({"model": model, "prompt": prompt, "google_search": google_search})
        if not self.responses:
            raise GeminiError("no scripted response")
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://abcd.supabase.co",
        supabase_service_role_key="service-role-key",
        supabase_anon_key="anon-key",
        gemini_api_key="gemini-key",
        cookie_secure=False,
    )


@pytest.fixture
def admin_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def public_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def context(settings, admin_db, public_db, gemini) -> AppContext:
    return AppContext(settings=settings, admin_db=admin_db, public_db=public_db, gemini=gemini)


@pytest.fixture
def client(context):
    from main import app

    app.dependency_overrides[get_context] = lambda: context
    try:
        # No `with`: the lifespan (real clients from env) is not started.
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()

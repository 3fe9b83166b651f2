"""
Session token helpers.

The auth service issues HS256 JWTs. With SUPABASE_JWT_SECRET set the
signature is verified; without it the claims are read as-is and the auth
service is left to reject bad tokens.
"""

from __future__ import annotations

import time
from typing import Any

import jwt


class SessionTokenError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def read_access_claims(token: str, *, jwt_secret: str = "") -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise SessionTokenError("Access token is empty.")

    # Expiry is checked by the caller so an expired token can still be refreshed.
    try:
        if jwt_secret:
            payload = jwt.decode(
                raw,
                jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
                options={"verify_exp": False},
            )
        else:
            payload = jwt.decode(raw, options={"verify_signature": False, "verify_exp": False})
    except jwt.InvalidTokenError as exc:
        raise SessionTokenError("Invalid access token.") from exc

    if not str(payload.get("sub") or "").strip():
        raise SessionTokenError("Access token has no subject.")
    return payload


def is_expired(claims: dict[str, Any], *, leeway_s: int = 10, now: int | None = None) -> bool:
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return False
    current = now_epoch_s() if now is None else now
    return exp <= current + leeway_s

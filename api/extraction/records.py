"""
Shape AI-extracted businesses into submission-ready records.
"""

from __future__ import annotations

import re
from typing import Any

_NON_DIGITS = re.compile(r"\D")

# Every extracted record starts life as an unreviewed submission.
BOOKKEEPING_FIELDS: dict[str, Any] = {
    "new_category": None,
    "backlink_url": None,
    "friends": False,
    "similar": False,
    "status": "pending",
}


def format_phone_number(phone: Any) -> str:
    """
    6045551234 -> (604) 555-1234, 16045551234 -> +1 (604) 555-1234.
    Anything else is returned unchanged.
    """
    if not phone:
        return ""
    phone = str(phone)
    digits = _NON_DIGITS.sub("", phone)
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+1 ({digits[1:4]}) {digits[4:7]}-{digits[7:]}"
    return phone


def normalize_business(
    raw: dict[str, Any],
    *,
    email_default: str | None = "",
    format_phone: bool = False,
) -> dict[str, Any]:
    phone = raw.get("phone")
    categories = raw.get("categories")
    return {
        "name": raw.get("name") or "",
        "address": raw.get("address") or "",
        "phone": (format_phone_number(phone) if format_phone else phone) or "",
        "email": raw.get("email") or email_default,
        "website": raw.get("website") or "",
        "description": raw.get("description") or "",
        "categories": categories if isinstance(categories, list) else [],
        **BOOKKEEPING_FIELDS,
    }

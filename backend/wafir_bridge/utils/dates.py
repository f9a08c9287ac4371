"""Date tokens accepted as default values of date fields."""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional

_OFFSET_RE = re.compile(r"^today([+-])(\d+)$")


def resolve_date_value(value: Optional[str]) -> str:
    """
    Resolve a date value or token to an ISO date string (YYYY-MM-DD).

    Supported tokens:
        "today"    -> current date
        "today+N"  -> N days from today
        "today-N"  -> N days before today
    Anything else (including ISO dates) is returned unchanged; empty or
    missing values resolve to "".
    """
    if not value or not isinstance(value, str):
        return ""

    token = value.strip().lower()
    if token == "today":
        return date.today().isoformat()

    match = _OFFSET_RE.match(token)
    if match:
        operator, days = match.groups()
        offset = int(days) if operator == "+" else -int(days)
        return (date.today() + timedelta(days=offset)).isoformat()

    return value


def is_date_token(value: Optional[str]) -> bool:
    if not value or not isinstance(value, str):
        return False
    token = value.strip().lower()
    return token == "today" or bool(_OFFSET_RE.match(token))

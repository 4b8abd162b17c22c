# farmledger/services/form_utils.py
"""
Small helpers for turning raw form values into typed values.
Every helper returns None instead of raising so callers can collect
all problems before reporting them.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Optional

ALNUM_RE = re.compile(r"^[a-zA-Z0-9]+$")
LETTERS_SPACES_RE = re.compile(r"^[a-zA-Z\s]+$")
PHONE_RE = re.compile(r"^[0-9+\-]{7,15}$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
WEIGHT_INFO_RE = re.compile(r"^\d+(\.\d+)?\s?kg$")
LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?|[+-]?\.\d+)")

DATE_FMT = "%Y-%m-%d"


def clean(value: Any) -> str:
    return str(value if value is not None else "").strip()


def to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        n = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(n) or math.isinf(n):
        return None
    return n


def to_int(value: Any) -> Optional[int]:
    """Whole numbers only: 3, "3" and 3.0 pass, 2.5 and "abc" do not."""
    n = to_float(value)
    if n is None or not n.is_integer():
        return None
    return int(n)


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = clean(value)
    if not s:
        return None
    try:
        return datetime.strptime(s[:10], DATE_FMT).date()
    except ValueError:
        return None


def in_range(day: Optional[date], start: Optional[date], end: Optional[date]) -> bool:
    """Inclusive calendar-day range; a missing bound is open."""
    if day is None:
        return False
    if start and day < start:
        return False
    if end and day > end:
        return False
    return True


def leading_number(text: Any) -> Optional[float]:
    """"0.25 kg" -> 0.25, "Varies" -> None"""
    m = LEADING_NUMBER_RE.match(clean(text))
    if not m:
        return None
    return float(m.group(1))

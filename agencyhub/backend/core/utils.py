"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

_QUOTES = re.compile(r"['\"‘’“”]")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive and assumed
    to be UTC. This keeps comparisons consistent across PostgreSQL and the
    SQLite test database.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def slugify(value: str) -> str:
    """
    Turn a title into a URL slug.

    "Ten Tips: Grow Your Brand's Reach!" -> "ten-tips-grow-your-brands-reach"
    """
    lowered = _QUOTES.sub("", value.strip().lower())
    return _NON_ALNUM.sub("-", lowered).strip("-")


def normalize_tags(value: Any) -> list[str]:
    """Accept a list or a comma-separated string; trim and drop empties."""
    if value is None:
        return []
    if isinstance(value, str):
        parts = value.split(",")
    else:
        parts = [str(item) for item in value]
    return [part.strip() for part in parts if part and part.strip()]


def round_money(value: Decimal | float | int) -> Decimal:
    """Round to cents, half up."""
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

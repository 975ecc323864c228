import math
from datetime import datetime, timezone
from typing import Any

DEFAULT_CATEGORY = "Other"

PREDEFINED_CATEGORIES = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Personal Care",
    DEFAULT_CATEGORY,
)


def require_positive_number(value: Any, label: str) -> float:
    # bool is an int subclass; JSON true must not pass as 1
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label} must be a positive number")
    try:
        number = float(value)
    except OverflowError:
        raise ValueError(f"{label} must be a positive number") from None
    if not math.isfinite(number) or number <= 0:
        raise ValueError(f"{label} must be a positive number")
    return number


def require_text(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{label} is required")
    return value.strip()


def category_or_default(value: Any) -> str:
    if value is None:
        return DEFAULT_CATEGORY
    if not isinstance(value, str):
        raise ValueError("Category must be text")
    return value.strip() or DEFAULT_CATEGORY


def to_utc_naive(value: datetime) -> datetime:
    """Store-side representation: UTC without tzinfo, as BSON dates round-trip."""
    if value.tzinfo is None:
        return value
    try:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    except OverflowError:
        # offsets near year 1 or 9999 shift past the datetime range
        raise ValueError("Date must be a valid date") from None


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return to_utc_naive(value)
    if isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValueError("Date must be a valid date") from None
        return to_utc_naive(parsed)
    raise ValueError("Date must be a valid date")

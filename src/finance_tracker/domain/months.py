import re
from datetime import MAXYEAR, datetime

MONTH_PATTERN = re.compile(r"\d{4}-\d{2}", re.ASCII)

MONTH_FORMAT_ERROR = "Month must be in YYYY-MM format"
MONTH_REQUIRED_ERROR = "Month parameter is required (format: YYYY-MM)"


def is_month(value: object) -> bool:
    return isinstance(value, str) and MONTH_PATTERN.fullmatch(value) is not None


def validate_month(value: object) -> str:
    if not is_month(value):
        raise ValueError(MONTH_FORMAT_ERROR)
    return value  # type: ignore[return-value]


def month_key(value: datetime) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def month_bounds(month: str) -> tuple[datetime, datetime]:
    """
    Return the [start, end) range of a ``YYYY-MM`` month as naive UTC datetimes.

    Raises ValueError for months that pass the format check but do not exist,
    such as ``2025-13``. The last representable month ends at ``datetime.max``.
    """
    year, month_number = (int(part) for part in validate_month(month).split("-"))
    start = datetime(year, month_number, 1)
    if month_number == 12 and year == MAXYEAR:
        end = datetime.max
    elif month_number == 12:
        end = datetime(year + 1, 1, 1)
    else:
        end = datetime(year, month_number + 1, 1)
    return start, end

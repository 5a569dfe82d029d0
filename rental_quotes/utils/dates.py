from datetime import date, datetime, time
from typing import Any, Optional, Union

DateLike = Union[date, datetime, str, None]


def to_datetime(value: Any) -> Optional[datetime]:
    """Parse a calendar value to a datetime at midnight when no time is given.

    Empty or unparseable input gives ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def to_date(value: Any) -> Optional[date]:
    parsed = to_datetime(value)
    return parsed.date() if parsed is not None else None

import math
from typing import Any

from rental_quotes.utils.dates import to_datetime

SECONDS_PER_DAY = 86400


def days(start: Any, end: Any) -> int:
    """Whole rental days between two dates, in either order.

    Same-day ranges give 0. Unparseable input also gives 0.
    """
    start_at = to_datetime(start)
    end_at = to_datetime(end)
    if start_at is None or end_at is None:
        return 0
    if (start_at.tzinfo is None) != (end_at.tzinfo is None):
        start_at = start_at.replace(tzinfo=None)
        end_at = end_at.replace(tzinfo=None)
    elapsed = abs((end_at - start_at).total_seconds())
    return math.ceil(elapsed / SECONDS_PER_DAY)

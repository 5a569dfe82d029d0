from typing import Any

from rental_quotes.core.enums import Season
from rental_quotes.schemas.season import SeasonWindow
from rental_quotes.utils.dates import to_date


def classify(stay_start: Any, stay_end: Any, window: SeasonWindow) -> Season:
    """Classify a stay as high or low season.

    A stay is high season when its first or last day falls inside the
    configured window, bounds included. A stay that spans the whole window
    without either endpoint inside it stays low season. An unset window
    always gives low season.
    """
    if not window.is_set:
        return Season.LOW

    window_start = window.high_season_start
    window_end = window.high_season_end

    for endpoint in (to_date(stay_start), to_date(stay_end)):
        if endpoint is not None and window_start <= endpoint <= window_end:
            return Season.HIGH
    return Season.LOW

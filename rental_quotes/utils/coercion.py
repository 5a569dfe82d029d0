import logging
import math
from typing import Any, Optional

logger = logging.getLogger(__name__)


def to_number(value: Any, fallback: Optional[float] = 0.0) -> Optional[float]:
    """Best-effort numeric coercion for user-typed values.

    Accepts ints, floats and numeric strings, with a comma as the decimal
    separator ("72,5" -> 72.5). Anything non-finite or unparseable returns
    ``fallback``.
    """
    if value is None:
        return fallback
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", ".", 1)
        if not text:
            return fallback
        try:
            number = float(text)
        except ValueError:
            logger.debug(f"Could not parse {value!r} as a number, using {fallback}")
            return fallback
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            logger.debug(f"Could not coerce {type(value).__name__} to a number, using {fallback}")
            return fallback

    if not math.isfinite(number):
        return fallback
    return number


def to_int(value: Any, fallback: Optional[int] = None) -> Optional[int]:
    number = to_number(value, None)
    if number is None:
        return fallback
    return int(number)

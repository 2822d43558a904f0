import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (62.5 -> 63).

    Python's round() uses banker's rounding, which would turn 62.5 into 62.
    """
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def clamp_score(value: int) -> int:
    """Clamp an integer score to [0, 100]."""
    return max(0, min(100, value))


def to_optional_float(value: Any) -> Optional[float]:
    """Coerce a loose record value to float, treating null/blank/garbage as unknown."""
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric value: {value!r}")
        return None
    if not math.isfinite(number):
        logger.debug(f"Ignoring non-finite value: {value!r}")
        return None
    return number


def to_optional_int(value: Any) -> Optional[int]:
    """Coerce a loose record value to int, treating null/blank/garbage as unknown."""
    number = to_optional_float(value)
    if number is None:
        return None
    return int(number)


def normalize_text(value: Any) -> str:
    """Lower-case and strip a free-text value; None becomes empty string."""
    if value is None:
        return ""
    return str(value).strip().lower()

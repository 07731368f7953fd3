"""
Display formatting helpers for partner metrics.

Rates from the webhook arrive either as fractions (0.2) or as already-scaled
percentages (20.0). The rule applied everywhere: a value greater than 1 is a
percentage, anything at or below 1 is a fraction.

Known ambiguity: exactly 1.0 is read as a fraction (100%), so a true 1% rate
sent as a percentage displays as 100%. The upstream sheet does not distinguish
the two, so the rule is kept as is.
"""

import math
from typing import Any, Optional

from partnerboard.models.enums import DisplayTone


MISSING_DISPLAY = "—"

# Adjusted success rate (as a fraction) from which a partner counts as performing
SUCCESS_RATE_THRESHOLD = 0.15

# Days-since-last-quote bands of the dormant view
DORMANCY_CRITICAL_DAYS = 180
DORMANCY_WARNING_DAYS = 120

# Days-since-last-quote bands of the partner detail panel
RECENCY_CRITICAL_DAYS = 90
RECENCY_WARNING_DAYS = 60


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def format_percent(value: Any) -> str:
    """
    Format a fraction-or-percentage rate as ``"12.3%"``.

    Examples:
        >>> format_percent(0.2)
        '20.0%'
        >>> format_percent(20)
        '20.0%'
        >>> format_percent(None)
        '—'
    """
    number = _as_number(value)
    if number is None:
        return MISSING_DISPLAY
    display = number if number > 1 else number * 100
    return f"{display:.1f}%"


def rate_as_fraction(value: Any) -> float:
    """Normalize a fraction-or-percentage rate to a fraction; missing yields 0."""
    number = _as_number(value)
    if number is None:
        return 0.0
    return number / 100 if number > 1 else number


def format_score(value: Any, decimals: int = 2) -> str:
    number = _as_number(value)
    if number is None:
        return MISSING_DISPLAY
    return f"{number:.{decimals}f}"


def format_date(value: Any) -> str:
    if not value:
        return MISSING_DISPLAY
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def success_tone(adjusted_rate: Any) -> DisplayTone:
    """Tone of the adjusted success rate column."""
    if rate_as_fraction(adjusted_rate) >= SUCCESS_RATE_THRESHOLD:
        return DisplayTone.SUCCESS
    return DisplayTone.DESTRUCTIVE


def dormancy_tone(days: int) -> DisplayTone:
    """Tone of the days-since-last-quote badge in the dormant view."""
    if days >= DORMANCY_CRITICAL_DAYS:
        return DisplayTone.DESTRUCTIVE
    if days >= DORMANCY_WARNING_DAYS:
        return DisplayTone.WARNING
    return DisplayTone.MUTED


def recency_tone(days: int) -> DisplayTone:
    """Tone of the days-since-last-quote value in the detail panel."""
    if days >= RECENCY_CRITICAL_DAYS:
        return DisplayTone.DESTRUCTIVE
    if days >= RECENCY_WARNING_DAYS:
        return DisplayTone.WARNING
    return DisplayTone.DEFAULT

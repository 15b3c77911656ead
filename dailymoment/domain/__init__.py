"""
Domain layer - Time-of-day values without any I/O.
"""

from .exceptions import InvalidDateRangeError, InvalidTimezoneError, MomentError
from .moment import (
    HOURS_PER_DAY,
    LOCAL,
    MINUTES_PER_HOUR,
    SECONDS_PER_MINUTE,
    Point,
    Span,
)

__all__ = [
    "HOURS_PER_DAY",
    "LOCAL",
    "MINUTES_PER_HOUR",
    "SECONDS_PER_MINUTE",
    "InvalidDateRangeError",
    "InvalidTimezoneError",
    "MomentError",
    "Point",
    "Span",
]

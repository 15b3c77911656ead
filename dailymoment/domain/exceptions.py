"""
Domain-specific exception hierarchy for dailymoment.
"""


class MomentError(Exception):
    """Base class for all application-level errors."""


class InvalidTimezoneError(MomentError, ValueError):
    """Raised when a time zone name cannot be resolved."""


class InvalidDateRangeError(MomentError, ValueError):
    """Raised when a date range ends before it starts."""

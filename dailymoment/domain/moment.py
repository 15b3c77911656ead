"""
Date-less time-of-day values and durations anchored to them.

A ``Point`` is an abstract moment of the day (09:30, 22:00:15, ...) that only
becomes a concrete timestamp once it is resolved against a calendar date.
A ``Span`` is a length of time starting at such a point.

Both types never fail on the inputs they were designed for: out-of-range
fields and missing time zones are ignored instead of raising.
"""

from __future__ import annotations

import logging
from datetime import date, time, timedelta, tzinfo
from typing import Optional, Union

import pendulum
from pendulum import DateTime

from .exceptions import InvalidTimezoneError

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
SECONDS_PER_MINUTE = 60
SECONDS_PER_DAY = HOURS_PER_DAY * MINUTES_PER_HOUR * SECONDS_PER_MINUTE

NANOSECONDS_PER_SECOND = 1_000_000_000
NANOSECONDS_PER_MICROSECOND = 1_000

# Placeholder resolved to the host time zone when a Point is created.
LOCAL = "local"

TimezoneLike = Union[tzinfo, str]


def _coerce_timezone(tz: TimezoneLike) -> tzinfo:
    """Turn a time zone name into a tzinfo, pass tzinfo objects through."""
    if not isinstance(tz, str):
        return tz
    if tz == LOCAL:
        return pendulum.local_timezone()
    try:
        return pendulum.timezone(tz)
    except (ValueError, KeyError) as exc:
        raise InvalidTimezoneError(f"Unknown time zone: '{tz}'") from exc


def _timezone_name(tz: Optional[tzinfo]) -> Optional[str]:
    if tz is None:
        return None
    return getattr(tz, "name", None) or str(tz)


class Point:
    """
    A time of day without a date.

    Fields are set through validating setters. A value outside the field's
    range is ignored and the previous value is kept. Setters mutate the
    instance they are called on; use ``copy()`` to get an independent value.

    The positional constructor takes up to four values in the order hour,
    minute, second, nanosecond::

        Point()              # 00:00:00 local time
        Point(9, 30)         # 09:30:00 local time
        Point(9, 30, tz="Europe/Berlin")

    Passing more than four values ignores all of them and gives 00:00:00.
    ``tz=None`` leaves the time zone unset, in which case ``resolve`` uses UTC.
    """

    __slots__ = ("_hour", "_minute", "_second", "_nanosecond", "_timezone")

    def __init__(self, *args: int, tz: Optional[TimezoneLike] = LOCAL):
        self._hour = 0
        self._minute = 0
        self._second = 0
        self._nanosecond = 0
        self._timezone: Optional[tzinfo] = None if tz is None else _coerce_timezone(tz)

        if len(args) > 4:
            logger.warning(
                "Point takes at most 4 values (hour, minute, second, nanosecond), got %d; "
                "using 00:00:00",
                len(args),
            )
            return

        if len(args) > 3:
            self._nanosecond = args[3]
        if len(args) > 2:
            self.set_second(args[2])
        if len(args) > 1:
            self.set_minute(args[1])
        if len(args) > 0:
            self.set_hour(args[0])

    @classmethod
    def of(
        cls,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanosecond: int = 0,
        tz: Optional[TimezoneLike] = LOCAL,
    ) -> "Point":
        """Create a point from named fields."""
        return cls(hour, minute, second, nanosecond, tz=tz)

    @classmethod
    def from_time(cls, value: time, tz: Optional[TimezoneLike] = LOCAL) -> "Point":
        """
        Create a point from a ``datetime.time``.

        The time's own tzinfo wins over ``tz`` when it is set.
        """
        zone = value.tzinfo if value.tzinfo is not None else tz
        return cls(
            value.hour,
            value.minute,
            value.second,
            value.microsecond * NANOSECONDS_PER_MICROSECOND,
            tz=zone,
        )

    @property
    def hour(self) -> int:
        return self._hour

    @property
    def minute(self) -> int:
        return self._minute

    @property
    def second(self) -> int:
        return self._second

    @property
    def nanosecond(self) -> int:
        return self._nanosecond

    @property
    def timezone(self) -> Optional[tzinfo]:
        return self._timezone

    def set_timezone(self, tz: Optional[TimezoneLike]) -> None:
        """
        Replace the time zone.

        ``None`` is ignored. Names are looked up in the time zone database
        and raise ``InvalidTimezoneError`` when unknown.
        """
        if tz is None:
            return
        self._timezone = _coerce_timezone(tz)

    def set_hour(self, hour: int) -> None:
        """Set the hour if it lies in [0, 24)."""
        if hour < 0 or hour >= HOURS_PER_DAY:
            logger.debug("Ignoring out-of-range hour %s", hour)
            return
        self._hour = hour

    def set_minute(self, minute: int) -> None:
        """Set the minute if it lies in [0, 60)."""
        if minute < 0 or minute >= MINUTES_PER_HOUR:
            logger.debug("Ignoring out-of-range minute %s", minute)
            return
        self._minute = minute

    def set_second(self, second: int) -> None:
        """Set the second if it lies in [0, 60)."""
        if second < 0 or second >= SECONDS_PER_MINUTE:
            logger.debug("Ignoring out-of-range second %s", second)
            return
        self._second = second

    def resolve(self, day: date) -> DateTime:
        """
        Return the concrete timestamp of this point on the given day.

        Args:
            day: Calendar date; only year, month and day are used, so a
                datetime may be passed and its time of day is ignored.

        Returns:
            Timestamp in the point's time zone, or in UTC when none is set.
            Nanoseconds beyond one second carry over into the seconds and
            precision below one microsecond is dropped.
        """
        tz = self._timezone if self._timezone is not None else pendulum.UTC
        carry, nanos = divmod(self._nanosecond, NANOSECONDS_PER_SECOND)

        moment = pendulum.datetime(
            day.year,
            day.month,
            day.day,
            self._hour,
            self._minute,
            self._second,
            nanos // NANOSECONDS_PER_MICROSECOND,
            tz=tz,
        )
        if carry:
            moment = moment.add(seconds=carry)
        return moment

    def copy(self) -> "Point":
        """Return an independent copy of this point."""
        clone = Point.__new__(Point)
        clone._hour = self._hour
        clone._minute = self._minute
        clone._second = self._second
        clone._nanosecond = self._nanosecond
        clone._timezone = self._timezone
        return clone

    __copy__ = copy

    def _key(self) -> tuple:
        return (self._hour, self._minute, self._second, self._nanosecond, self._timezone)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self._key() == other._key()

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"Point(hour={self._hour}, minute={self._minute}, second={self._second}, "
            f"nanosecond={self._nanosecond}, timezone={_timezone_name(self._timezone)!r})"
        )


class Span:
    """
    A length of time starting at a time of day.

    The span keeps its own copy of the starting point, so later changes to
    the point passed in do not affect it. The length is not validated: it
    may be zero, negative or longer than a day.
    """

    __slots__ = ("_begin", "_length")

    def __init__(self, begin: Point, length: timedelta):
        self._begin = begin.copy()
        self._length = length

    @property
    def begin(self) -> Point:
        return self._begin.copy()

    @property
    def length(self) -> timedelta:
        return self._length

    def start(self, day: date) -> DateTime:
        """Return the start of the span on the given day."""
        return self._begin.resolve(day)

    def end(self, day: date) -> DateTime:
        """
        Return the end of the span on the given day.

        With a negative length the end lies before the start. The length is
        added as elapsed time, so a one day span across a DST change ends at
        a different wall clock time.
        """
        # Integer parts only: adding a timedelta goes through float seconds.
        return self.start(day).add(
            seconds=self._length.days * SECONDS_PER_DAY + self._length.seconds,
            microseconds=self._length.microseconds,
        )

    def interval(self, day: date) -> pendulum.Interval:
        """Return the span on the given day as a pendulum interval."""
        return pendulum.interval(self.start(day), self.end(day))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Span):
            return NotImplemented
        return self._begin == other._begin and self._length == other._length

    __hash__ = None

    def __repr__(self) -> str:
        return f"Span(begin={self._begin!r}, length={self._length!r})"
